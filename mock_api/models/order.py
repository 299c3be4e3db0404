"""Order models for the mock commerce API"""

from pydantic import BaseModel, Field
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


class OrderAddress(BaseModel):
    street: str


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)


class CreateOrderRequest(BaseModel):
    """Order placement request"""
    address: OrderAddress
    phone: str
    email: str
    state: str
    city: str
    payment_method: str = "credit_card"
    total: Optional[float] = None
    delivery_fee: float = 0.0
    discount_code: Optional[str] = None
    callback_url: Optional[str] = None
    items: list[OrderItemRequest] = []


class OrderItem(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    price: float


class Order(BaseModel):
    """Placed order"""
    id: str
    user_id: str
    order_items: list[OrderItem]
    subtotal: float
    delivery_fee: float
    discount_code: Optional[str] = None
    total: float
    state: str
    city: str
    address: OrderAddress
    phone: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_reference: str
    order_status: OrderStatus = OrderStatus.PENDING
    created_at: str

