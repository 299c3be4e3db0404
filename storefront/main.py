"""
Storefront Application

Shopper-facing service for the wellness store: catalog browsing, cart,
checkout with payment handoff, order tracking and sign-in. Business rules
live in the remote commerce API; this service keeps per-shopper state and
talks to it.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .core.config import Settings, get_settings
from .core.session import SessionManager
from .routes import (
    products_router,
    cart_router,
    checkout_router,
    auth_router,
    orders_router,
)
from .routes.deps import SESSION_HEADER
from .services.commerce_client import CommerceClient

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    commerce_client: Optional[CommerceClient] = None,
) -> FastAPI:
    """
    Build the storefront app.

    Args:
        settings: Configuration; defaults to the environment
        commerce_client: Client for the commerce API; defaults to one built
            from ``settings.api_base_url``
    """
    settings = settings or get_settings()
    client = commerce_client or CommerceClient(
        settings.api_base_url,
        timeout=settings.request_timeout,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Storefront starting up...")
        logger.info(f"Commerce API: {settings.api_base_url}")

        yield

        logger.info("Storefront shutting down...")
        await client.close()

    app = FastAPI(
        title=settings.app_name,
        description="Shopper-facing storefront for the wellness store",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.commerce_client = client
    app.state.session_manager = SessionManager(
        client,
        payment_callback_url=settings.payment_callback_url,
        max_age_hours=settings.session_max_age_hours,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[SESSION_HEADER],
    )

    # Include routers
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(auth_router)
    app.include_router(orders_router)

    @app.get("/")
    async def home():
        return {
            "message": "Wellness Storefront API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "cart": "/api/cart",
                "checkout": "/api/checkout",
                "auth": "/api/auth",
                "orders": "/api/orders",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "storefront",
            "api_configured": bool(settings.api_base_url),
            "active_sessions": len(app.state.session_manager.sessions),
        }

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
