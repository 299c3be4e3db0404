"""Tests for the storefront HTTP API."""

import httpx
import pytest

from storefront.core.config import Settings
from storefront.main import create_app
from storefront.routes.deps import SESSION_HEADER, upstream_status

DELIVERY = {
    "state": "Lagos",
    "city": "Ikeja",
    "address": "12 Allen Avenue, Ikeja",
    "phone": "08012345678",
}


@pytest.fixture
def storefront(commerce_client):
    settings = Settings(frontend_url="http://shop.test")
    return create_app(settings, commerce_client=commerce_client)


@pytest.fixture
async def shopper(storefront):
    """HTTP client that keeps its session header between requests"""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=storefront),
        base_url="http://storefront.test",
    ) as client:
        yield client


async def start_session(client: httpx.AsyncClient, email="demo@example.com", password="password123"):
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    client.headers[SESSION_HEADER] = response.headers[SESSION_HEADER]
    return response


class TestSession:

    async def test_new_session_issued(self, shopper):
        response = await shopper.get("/api/cart")

        # A signed-out cart read degrades to an empty cart
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.headers[SESSION_HEADER]

    async def test_session_reused(self, shopper, storefront):
        await start_session(shopper)
        response = await shopper.get("/api/auth/me")

        assert response.status_code == 200
        assert response.headers[SESSION_HEADER] == shopper.headers[SESSION_HEADER]
        assert len(storefront.state.session_manager.sessions) == 1

    async def test_sessions_are_isolated(self, shopper, storefront, tea_product):
        await start_session(shopper)
        await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 2})

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=storefront),
            base_url="http://storefront.test",
        ) as other:
            response = await other.get("/api/auth/me")
            assert response.status_code == 401

    async def test_health(self, shopper):
        response = await shopper.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthRoutes:

    async def test_login(self, shopper):
        response = await start_session(shopper)

        data = response.json()
        assert data["user"]["email"] == "demo@example.com"
        assert data["redirect_to"] == "/products"

    async def test_login_failure(self, shopper):
        response = await shopper.post(
            "/api/auth/login",
            json={"email": "demo@example.com", "password": "nope"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email or password"

    async def test_logout(self, shopper):
        await start_session(shopper)

        await shopper.post("/api/auth/logout")
        response = await shopper.get("/api/auth/me")

        assert response.status_code == 401

    async def test_google_success_admin(self, shopper, mock_db):
        admin = mock_db.users.find_by_email("admin@example.com")
        token = mock_db.users.issue_token(admin)

        response = await shopper.get("/api/auth/google/success", params={"token": token})

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/admin/dashboard"

    async def test_google_success_without_token(self, shopper):
        response = await shopper.get("/api/auth/google/success")

        assert response.status_code == 401
        assert response.json()["detail"]["message"] == "No authentication token received"
        assert response.json()["detail"]["redirect_to"] == "/login"


class TestAccountRecoveryRoutes:

    async def test_forgot_and_reset_password(self, shopper, mock_db):
        response = await shopper.post("/api/auth/forgot-password", json={"email": "demo@example.com"})
        assert response.status_code == 200
        [token] = mock_db.users.action_tokens

        response = await shopper.post("/api/auth/reset-password", json={
            "token": token,
            "new_password": "brand-new-pass",
            "confirm_password": "brand-new-pass",
        })

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/login"
        await start_session(shopper, password="brand-new-pass")

    async def test_reset_with_unknown_link(self, shopper):
        response = await shopper.post("/api/auth/reset-password", json={
            "token": "not-a-link",
            "new_password": "brand-new-pass",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired reset link"

    async def test_reset_password_mismatch(self, shopper, mock_db):
        response = await shopper.post("/api/auth/reset-password", json={
            "token": "tok",
            "new_password": "brand-new-pass",
            "confirm_password": "other-pass-1",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match"

    async def test_verify_email(self, shopper, mock_db):
        response = await shopper.post("/api/auth/resend-verification", json={"email": "demo@example.com"})
        assert response.status_code == 200
        [token] = mock_db.users.action_tokens

        response = await shopper.post("/api/auth/verify-email", json={"token": token})

        assert response.status_code == 200
        assert response.json()["message"] == "Email verified successfully!"
        assert mock_db.users.find_by_email("demo@example.com").is_verified

    async def test_resend_to_verified_address(self, shopper, mock_db):
        mock_db.users.find_by_email("demo@example.com").is_verified = True

        response = await shopper.post("/api/auth/resend-verification", json={"email": "demo@example.com"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email is already verified"

    async def test_invalid_email(self, shopper):
        response = await shopper.post("/api/auth/forgot-password", json={"email": "not an email"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a valid email address"


class TestCatalogRoutes:

    async def test_list_products(self, shopper):
        response = await shopper.get("/api/products", params={"sort_by": "price", "sort_order": "desc"})

        products = response.json()["products"]
        assert response.status_code == 200
        assert products[0]["id"] == "prod-004"

    async def test_unknown_product(self, shopper):
        response = await shopper.get("/api/products/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"

    async def test_categories(self, shopper):
        response = await shopper.get("/api/products/categories")
        assert {c["id"] for c in response.json()} == {"cat-supplements", "cat-herbal", "cat-personal-care"}


class TestCartRoutes:

    async def test_add_update_remove(self, shopper, tea_product):
        await start_session(shopper)

        response = await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 3})
        cart = response.json()
        assert cart["subtotal"] == 6000
        assert cart["item_count"] == 3
        line_item_id = cart["items"][0]["id"]

        response = await shopper.put(f"/api/cart/items/{line_item_id}", json={"quantity": 1})
        assert response.json()["subtotal"] == 2000

        response = await shopper.put(f"/api/cart/items/{line_item_id}", json={"quantity": 0})
        assert response.json()["items"] == []
        assert response.json()["message"] == "Item removed"

    async def test_add_over_stock(self, shopper):
        await start_session(shopper)

        response = await shopper.post("/api/cart/items", json={"product_id": "prod-004", "quantity": 4})

        assert response.status_code == 400
        assert response.json()["detail"] == "Insufficient stock. Available: 3"

    async def test_cart_survives_sign_in(self, shopper, tea_product, mock_db):
        user = mock_db.users.find_by_email("demo@example.com")
        mock_db.carts.add_item(user.id, tea_product.id, 2)

        await start_session(shopper)
        response = await shopper.get("/api/cart")

        assert response.json()["item_count"] == 2


class TestCheckoutRoutes:

    async def test_states(self, shopper):
        states = {s["name"]: s for s in (await shopper.get("/api/checkout/states")).json()["states"]}

        assert states["Lagos"]["delivery_fee"] == 10000
        assert states["Ogun"]["tier"] == "nearby"
        assert states["Kano"]["delivery_fee"] == 27000

    async def test_validate(self, shopper):
        response = await shopper.post("/api/checkout/validate", json={**DELIVERY, "phone": "12345"})

        assert response.json() == {
            "valid": False,
            "errors": {"phone": "Enter a valid Nigerian phone number"},
        }

    async def test_quote(self, shopper, tea_product):
        await start_session(shopper)
        await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 3})

        response = await shopper.post("/api/checkout/quote", json={"state": "Enugu"})

        assert response.json()["total"] == 33000
        assert response.json()["formatted_total"] == "₦33,000.00"

    async def test_empty_cart(self, shopper):
        await start_session(shopper)

        response = await shopper.post("/api/checkout", json=DELIVERY)

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "EMPTY_CART"
        assert response.json()["detail"]["redirect_to"] == "/cart"

    async def test_signed_out_checkout(self, shopper, storefront, tea_product, mock_db):
        await start_session(shopper)
        await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 1})
        session = storefront.state.session_manager.get_session(shopper.headers[SESSION_HEADER])
        session.auth.user = None

        response = await shopper.post("/api/checkout", json=DELIVERY)

        assert response.status_code == 401
        assert response.json()["detail"]["redirect_to"] == "/login?redirect=/checkout"

    async def test_invalid_draft(self, shopper, tea_product):
        await start_session(shopper)
        await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 1})

        response = await shopper.post("/api/checkout", json={"state": "Lagos"})

        detail = response.json()["detail"]
        assert response.status_code == 400
        assert detail["kind"] == "INVALID_DRAFT"
        assert set(detail["errors"]) == {"city", "address", "phone"}

    async def test_submit_then_verify_payment(self, shopper, tea_product):
        await start_session(shopper)
        await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 2})

        response = await shopper.post("/api/checkout", json=DELIVERY)

        assert response.status_code == 200
        handoff = response.json()
        assert handoff["authorization_url"].startswith("https://payments.example.com/checkout")
        assert "callback_url=http%3A%2F%2Fshop.test%2Fverify-payment" in handoff["authorization_url"]
        assert (await shopper.get("/api/cart")).json()["items"] == []

        response = await shopper.get(f"/api/orders/verify-payment/{handoff['reference']}")
        assert response.json()["status"] == "success"
        assert response.json()["redirect_to"] == "/orders"

        response = await shopper.get(f"/api/orders/{handoff['order_id']}")
        assert response.json()["total"] == 4000 + 10000
        assert response.json()["payment_status"] == "success"

    async def test_stock_conflict(self, shopper, tea_product, mock_db):
        await start_session(shopper)
        await shopper.post("/api/cart/items", json={"product_id": tea_product.id, "quantity": 5})
        mock_db.products.update_stock(tea_product.id, -8)

        response = await shopper.post("/api/checkout", json=DELIVERY)

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "STOCK_CONFLICT"
        assert response.json()["detail"]["redirect_to"] == "/cart"


class TestUpstreamStatus:

    @pytest.mark.parametrize("status_code, expected", [
        (400, 400),
        (404, 404),
        (500, 502),
        (None, 502),
    ])
    def test_mapping(self, status_code, expected):
        assert upstream_status(status_code) == expected
