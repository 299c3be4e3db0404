"""Checkout and order models for the storefront"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    CASH_ON_DELIVERY = "cash_on_delivery"


class CheckoutDraft(BaseModel):
    """
    Delivery and contact details collected before an order is placed.

    Transient: built fresh for every checkout attempt and never stored.
    ``state`` is the delivery region and ``city`` the locality.
    """
    state: str = ""
    city: str = ""
    address: str = ""
    phone: str = ""
    discount_code: str = ""


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int


class OrderAddress(BaseModel):
    street: str


class CreateOrderRequest(BaseModel):
    """Body of ``POST /orders/create``"""
    address: OrderAddress
    phone: str
    email: str
    state: str
    city: str
    total: float
    delivery_fee: float
    items: list[OrderItemRequest]
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    discount_code: Optional[str] = None
    callback_url: Optional[str] = None


class OrderItem(BaseModel):
    """Item in a placed order"""
    product_id: str
    product_name: str
    quantity: int
    price: float


class Order(BaseModel):
    """Placed order"""
    id: str
    user_id: str
    order_items: list[OrderItem] = []
    subtotal: float
    delivery_fee: float
    discount_code: Optional[str] = None
    total: float
    state: str
    city: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: Optional[str] = None
    order_status: OrderStatus = OrderStatus.PENDING
    created_at: Optional[str] = None


class QuoteRequest(BaseModel):
    state: Optional[str] = None
