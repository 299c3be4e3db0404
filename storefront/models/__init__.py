# Storefront Models

from .product import Category, Product, ProductFilters
from .cart import CartLineItem, AddToCartRequest, UpdateCartItemRequest, CartResponse
from .user import (
    User,
    UserAddress,
    LoginRequest,
    RegisterRequest,
    ProfileUpdateRequest,
    VerifyEmailRequest,
    EmailRequest,
    ResetPasswordRequest,
)
from .checkout import (
    CheckoutDraft,
    CreateOrderRequest,
    Order,
    OrderAddress,
    OrderItem,
    OrderItemRequest,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    QuoteRequest,
)

__all__ = [
    "Category",
    "Product",
    "ProductFilters",
    "CartLineItem",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CartResponse",
    "User",
    "UserAddress",
    "LoginRequest",
    "RegisterRequest",
    "ProfileUpdateRequest",
    "VerifyEmailRequest",
    "EmailRequest",
    "ResetPasswordRequest",
    "CheckoutDraft",
    "CreateOrderRequest",
    "Order",
    "OrderAddress",
    "OrderItem",
    "OrderItemRequest",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "QuoteRequest",
]
