"""
Mock Commerce API

In-memory stand-in for the wellness store's commerce backend: catalog,
cart, orders, payment references and bearer-token auth. Used for local
development and as the storefront's test double.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .database import MockDatabase
from .errors import install_error_handlers
from .routes import auth_router, products_router, cart_router, orders_router

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEMO_USERS = [
    # email, password, full name, phone, admin
    ("demo@example.com", "password123", "Demo Shopper", "08012345678", False),
    ("admin@example.com", "admin12345", "Store Admin", "08087654321", True),
]


def seed_demo_users(db: MockDatabase) -> None:
    for email, password, full_name, phone, is_admin in DEMO_USERS:
        db.users.create_user(
            email=email,
            password=password,
            full_name=full_name,
            phone=phone,
            is_admin=is_admin,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Mock Commerce API starting up...")
    logger.info(f"Catalog: {len(app.state.db.products.products)} products")
    yield
    logger.info("Mock Commerce API shutting down...")


def create_app(seed: bool = True) -> FastAPI:
    """Build an app with its own fresh in-memory state"""
    app = FastAPI(
        title="Mock Commerce API",
        description="In-memory commerce backend for storefront development",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.db = MockDatabase()
    app.state.oauth_success_url = os.getenv(
        "OAUTH_SUCCESS_URL",
        "http://localhost:8000/api/auth/google/success",
    )
    if seed:
        seed_demo_users(app.state.db)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    # Include API routers
    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(orders_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "mock-commerce-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mock_api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
