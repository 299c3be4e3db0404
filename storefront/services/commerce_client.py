"""
Commerce API Client

HTTP client for the remote commerce API (catalog, cart, orders, payment, auth).
Attaches the shopper's bearer token to every request.
"""

import logging
from typing import Optional, Any

import httpx

from ..core.tokens import TokenStore
from ..models.product import ProductFilters

logger = logging.getLogger(__name__)


class CommerceAPIError(Exception):
    """Base exception for commerce API errors"""

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        payload: Optional[dict] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.payload = payload or {}
        super().__init__(message or f"Commerce API request failed ({status_code})")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "CommerceAPIError":
        """Build an error from a failed response, keeping the server's message"""
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        message = payload.get("error") or payload.get("message")
        error_cls = AuthenticationError if response.status_code == 401 else cls
        return error_cls(
            message=message if isinstance(message, str) else None,
            status_code=response.status_code,
            code=payload.get("code"),
            payload=payload,
        )


class AuthenticationError(CommerceAPIError):
    """The API rejected the bearer token"""
    pass


class CommerceClient:
    """
    Client for the remote commerce REST API.

    One instance owns the connection pool; ``bind`` hands out clients that
    share it but read a different shopper's token.
    """

    def __init__(
        self,
        base_url: str,
        token_store: Optional[TokenStore] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize commerce client.

        Args:
            base_url: Base URL of the commerce API, including any ``/api`` prefix
            token_store: Where the shopper's bearer token is read from
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used to target an in-process app)
            http_client: Existing client to share instead of creating one
        """
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or TokenStore()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
        )

    def bind(self, token_store: TokenStore) -> "CommerceClient":
        """Client sharing this connection pool, authenticated by another token store"""
        return CommerceClient(
            self.base_url,
            token_store=token_store,
            http_client=self._http_client,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        if self._owns_http_client:
            await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the bearer token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        token = self.token_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        """Make an HTTP request with the shopper's token"""
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                json=body,
                params=params,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise CommerceAPIError(message=None) from e

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            error = CommerceAPIError.from_response(response)
            if isinstance(error, AuthenticationError):
                # Stale or revoked token: forget it so the shopper signs in again
                self.token_store.clear_token()
            raise error

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            # e.g. an HTML page from a proxy in front of the API
            logger.error(f"Invalid JSON from {method} {url}: {response.text[:200]}")
            raise CommerceAPIError(status_code=response.status_code) from e

    # ==================== Product APIs ====================

    async def get_products(self, filters: Optional[ProductFilters] = None) -> dict:
        """List catalog products"""
        params = filters.to_params() if filters else {}
        return await self._request("GET", "/products", params=params)

    async def get_product(self, product_id: str) -> dict:
        """Get product details"""
        data = await self._request("GET", f"/products/{product_id}")
        return data["product"]

    async def get_categories(self) -> list[dict]:
        """Get available product categories"""
        data = await self._request("GET", "/products/categories/all")
        return data["categories"]

    # ==================== Cart APIs ====================

    async def get_cart(self) -> list[dict]:
        """Get the shopper's cart line items"""
        data = await self._request("GET", "/cart")
        cart = data.get("cart") if isinstance(data, dict) else data
        if cart is None:
            return []
        if not isinstance(data, dict) or not isinstance(cart, list):
            logger.error(f"Unexpected cart payload: {data!r:.200}")
            raise CommerceAPIError(status_code=200)
        return cart

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> dict:
        """Add item to cart"""
        return await self._request(
            "POST",
            "/cart/add",
            body={"product_id": product_id, "quantity": quantity},
        )

    async def update_cart_item(self, line_item_id: str, quantity: int) -> dict:
        """Update line item quantity"""
        return await self._request(
            "PUT",
            f"/cart/update/{line_item_id}",
            body={"quantity": quantity},
        )

    async def remove_from_cart(self, line_item_id: str) -> dict:
        """Remove line item from cart"""
        return await self._request("DELETE", f"/cart/remove/{line_item_id}")

    async def clear_cart(self) -> dict:
        """Remove every line item"""
        return await self._request("DELETE", "/cart/clear")

    # ==================== Order APIs ====================

    async def create_order(self, order: dict) -> dict:
        """
        Place an order.

        The response carries ``payment.authorization_url``, the hosted
        payment page the shopper is redirected to.
        """
        return await self._request("POST", "/orders/create", body=order)

    async def get_orders(self, page: int = 1, limit: int = 10) -> dict:
        """Get a page of the shopper's orders"""
        return await self._request(
            "GET",
            "/orders",
            params={"page": str(page), "limit": str(limit)},
        )

    async def get_order(self, order_id: str) -> dict:
        """Get order details"""
        data = await self._request("GET", f"/orders/{order_id}")
        return data["order"]

    # ==================== Payment APIs ====================

    async def verify_payment(self, reference: str) -> dict:
        """Check a payment reference returned by the gateway"""
        return await self._request("GET", f"/payment/verify/{reference}")

    # ==================== Auth APIs ====================

    async def register(self, email: str, password: str, full_name: str, phone: str) -> dict:
        """Create an account and store the issued token"""
        data = await self._request(
            "POST",
            "/auth/register",
            body={
                "email": email,
                "password": password,
                "full_name": full_name,
                "phone": phone,
            },
        )
        if data.get("token"):
            self.token_store.set_token(data["token"])
        return data

    async def login(self, email: str, password: str) -> dict:
        """Sign in and store the issued token"""
        data = await self._request(
            "POST",
            "/auth/login",
            body={"email": email, "password": password},
        )
        if data.get("token"):
            self.token_store.set_token(data["token"])
        return data

    def logout(self) -> None:
        """Forget the stored token"""
        self.token_store.clear_token()

    async def get_current_user(self) -> dict:
        """Get the user the stored token belongs to"""
        data = await self._request("GET", "/auth/me")
        return data["user"]

    async def update_profile(self, profile: dict) -> dict:
        """Update name, phone or saved address"""
        return await self._request("PUT", "/auth/profile", body=profile)

    async def verify_email(self, token: str) -> dict:
        return await self._request("POST", "/auth/verify-email", body={"token": token})

    async def resend_verification(self, email: str) -> dict:
        return await self._request("POST", "/auth/resend-verification", body={"email": email})

    async def forgot_password(self, email: str) -> dict:
        return await self._request("POST", "/auth/forgot-password", body={"email": email})

    async def reset_password(self, token: str, new_password: str) -> dict:
        return await self._request(
            "POST",
            "/auth/reset-password",
            body={"token": token, "newPassword": new_password},
        )
