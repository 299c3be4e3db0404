"""Helpers for building clients and API payloads in tests."""

import httpx

from storefront.core.tokens import TokenStore
from storefront.services.commerce_client import CommerceClient


API_BASE_URL = "http://commerce.test/api"


def make_client(handler, token_store=None) -> CommerceClient:
    """Client whose requests are answered by ``handler(request)``"""
    return CommerceClient(
        API_BASE_URL,
        token_store=token_store or TokenStore(),
        transport=httpx.MockTransport(handler),
    )


def cart_row(row_id="row-1", product_id="prod-1", quantity=1, price=2000.0, stock=10):
    """Cart line as the API returns it"""
    return {
        "id": row_id,
        "user_id": "user-1",
        "product_id": product_id,
        "quantity": quantity,
        "created_at": "2024-01-01T00:00:00",
        "products": {
            "id": product_id,
            "name": f"Product {product_id}",
            "price": price,
            "stock": stock,
        },
    }


class RecordingHandler:
    """MockTransport handler that records requests and replies from a table"""

    def __init__(self, routes=None):
        # (method, path) -> httpx.Response or callable(request) -> httpx.Response
        self.routes = routes or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes.get((request.method, request.url.path))
        if reply is None:
            return httpx.Response(404, json={"error": "Not found"})
        return reply(request) if callable(reply) else reply

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]
