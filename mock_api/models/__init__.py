# Mock commerce API models

from .product import Category, Product
from .cart import CartRow, AddToCartRequest, UpdateCartItemRequest
from .order import (
    CreateOrderRequest,
    Order,
    OrderAddress,
    OrderItem,
    OrderItemRequest,
    OrderStatus,
    PaymentStatus,
)
from .user import (
    User,
    UserAddress,
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    EmailRequest,
    TokenRequest,
    ResetPasswordRequest,
)

__all__ = [
    "Category",
    "Product",
    "CartRow",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CreateOrderRequest",
    "Order",
    "OrderAddress",
    "OrderItem",
    "OrderItemRequest",
    "OrderStatus",
    "PaymentStatus",
    "User",
    "UserAddress",
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "EmailRequest",
    "TokenRequest",
    "ResetPasswordRequest",
]
