# Mock commerce API storage

from .products import ProductDatabase
from .carts import CartDatabase
from .orders import OrderDatabase, DISCOUNT_CODES
from .users import UserDatabase


class MockDatabase:
    """All state of one mock API instance"""

    def __init__(self):
        self.products = ProductDatabase()
        self.carts = CartDatabase()
        self.orders = OrderDatabase()
        self.users = UserDatabase()


__all__ = [
    "MockDatabase",
    "ProductDatabase",
    "CartDatabase",
    "OrderDatabase",
    "UserDatabase",
    "DISCOUNT_CODES",
]
