"""Order storage for the mock commerce API"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.order import (
    CreateOrderRequest,
    Order,
    OrderItem,
    PaymentStatus,
)

# Percentage off the subtotal
DISCOUNT_CODES = {
    "WELCOME10": 10,
    "WELLNESS20": 20,
}


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, Order] = {}
        self.payments: dict[str, str] = {}  # reference -> order id

    def create_order(
        self,
        user_id: str,
        request: CreateOrderRequest,
        items: list[OrderItem],
    ) -> Order:
        """Create a pending order and a payment reference for it"""
        subtotal = sum(item.price * item.quantity for item in items)
        discount_code = (request.discount_code or "").upper() or None
        percentage = DISCOUNT_CODES.get(discount_code, 0) if discount_code else 0
        discount = round(subtotal * percentage / 100, 2)

        order = Order(
            id=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            user_id=user_id,
            order_items=items,
            subtotal=subtotal,
            delivery_fee=request.delivery_fee,
            discount_code=discount_code if percentage else None,
            total=subtotal - discount + request.delivery_fee,
            state=request.state,
            city=request.city,
            address=request.address,
            phone=request.phone,
            payment_reference=self._new_reference(),
            created_at=datetime.utcnow().isoformat(),
        )

        self.orders[order.id] = order
        self.payments[order.payment_reference] = order.id
        return order

    def _new_reference(self) -> str:
        return f"PAY-{uuid.uuid4().hex[:12]}"

    def get_order(self, order_id: str) -> Optional[Order]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def get_by_reference(self, reference: str) -> Optional[Order]:
        order_id = self.payments.get(reference)
        return self.orders.get(order_id) if order_id else None

    def mark_paid(self, reference: str) -> Optional[Order]:
        order = self.get_by_reference(reference)
        if order is None:
            return None
        order.payment_status = PaymentStatus.SUCCESS
        return order

    def list_orders(self, user_id: str, page: int = 1, limit: int = 10) -> tuple[list[Order], int]:
        """A user's orders, newest first"""
        orders = [o for o in self.orders.values() if o.user_id == user_id]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        offset = (page - 1) * limit
        return orders[offset : offset + limit], len(orders)
