"""Order and payment routes for the mock commerce API"""

import logging
from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Query

from ..database import MockDatabase
from ..errors import APIError
from ..models.order import CreateOrderRequest, OrderItem
from ..models.user import User
from .deps import get_db, current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])

PAYMENT_PAGE_URL = "https://payments.example.com/checkout"


def _authorization_url(reference: str, callback_url: Optional[str] = None) -> str:
    params = {"reference": reference}
    if callback_url:
        params["callback_url"] = callback_url
    return f"{PAYMENT_PAGE_URL}?{urlencode(params)}"


@router.post("/orders/create", status_code=201)
async def create_order(
    request: CreateOrderRequest,
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    """
    Place an order from the user's server-side cart.

    Stock is checked for every line before anything is reserved.
    """
    rows = db.carts.list_for_user(user.id)
    if not rows:
        raise APIError(400, "Cart is empty", code="EMPTY_CART")

    items = []
    for row in rows:
        product = db.products.get_product(row.product_id)
        if product is None or product.stock < row.quantity:
            name = product.name if product else row.product_id
            raise APIError(400, f"Insufficient stock for {name}", code="INSUFFICIENT_STOCK")
        items.append(OrderItem(
            product_id=product.id,
            product_name=product.name,
            quantity=row.quantity,
            price=product.price,
        ))

    for item in items:
        db.products.update_stock(item.product_id, -item.quantity)

    order = db.orders.create_order(user.id, request, items)
    logger.info(f"Order {order.id} created: {order.total} for user {user.id}")

    return {
        "order": order,
        "payment": {
            "reference": order.payment_reference,
            "authorization_url": _authorization_url(order.payment_reference, request.callback_url),
        },
    }


@router.get("/orders")
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    orders, total = db.orders.list_orders(user.id, page=page, limit=limit)
    return {"orders": orders, "total": total, "page": page, "limit": limit}


@router.get("/orders/{order_id}")
async def get_order(
    order_id: str,
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    order = db.orders.get_order(order_id)
    if order is None or order.user_id != user.id:
        raise APIError(404, "Order not found")
    return {"order": order}


@router.get("/payment/verify/{reference}")
async def verify_payment(
    reference: str,
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    """Mock gateway: every known reference verifies as paid"""
    order = db.orders.get_by_reference(reference)
    if order is None or order.user_id != user.id:
        raise APIError(404, "Payment reference not found")

    order = db.orders.mark_paid(reference)
    return {"status": order.payment_status.value, "order": order}
