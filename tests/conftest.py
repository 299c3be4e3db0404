"""Shared pytest fixtures for storefront tests."""

import httpx
import pytest

from mock_api.main import create_app as create_mock_api
from mock_api.models.product import Product
from storefront.core.tokens import TokenStore
from storefront.services.auth_store import AuthStore
from storefront.services.cart_store import CartStore
from storefront.services.checkout import CheckoutOrchestrator
from storefront.services.commerce_client import CommerceClient

from .helpers import API_BASE_URL


@pytest.fixture
def mock_api():
    """Fresh in-memory commerce API"""
    return create_mock_api()


@pytest.fixture
def mock_db(mock_api):
    return mock_api.state.db


@pytest.fixture
def tea_product(mock_db):
    """A product priced at 2000 with plenty of stock"""
    return mock_db.products.add_product(Product(
        id="prod-test",
        name="Hibiscus Tea",
        category_id="cat-herbal",
        price=2000.0,
        stock=10,
        created_at="2024-01-01T00:00:00",
    ))


@pytest.fixture
def demo_token(mock_db):
    user = mock_db.users.find_by_email("demo@example.com")
    return mock_db.users.issue_token(user)


@pytest.fixture
def token_store():
    return TokenStore()


@pytest.fixture
async def commerce_client(mock_api, token_store):
    client = CommerceClient(
        API_BASE_URL,
        token_store=token_store,
        transport=httpx.ASGITransport(app=mock_api),
    )
    yield client
    await client.close()


@pytest.fixture
def signed_in_client(commerce_client, token_store, demo_token):
    token_store.set_token(demo_token)
    return commerce_client


@pytest.fixture
def cart_store(signed_in_client):
    return CartStore(signed_in_client)


@pytest.fixture
async def auth_store(signed_in_client, token_store):
    auth = AuthStore(signed_in_client, token_store)
    await auth.check_auth()
    return auth


@pytest.fixture
def checkout(signed_in_client, cart_store, auth_store):
    return CheckoutOrchestrator(
        signed_in_client,
        cart_store,
        auth_store,
        callback_url="http://storefront.test/verify-payment",
    )
