"""Order history and payment verification routes"""

from fastapi import APIRouter, Depends, Query

from ..core.session import ShopperSession
from ..models.checkout import Order
from ..services.commerce_client import CommerceAPIError
from .deps import get_session, api_error

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("")
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: ShopperSession = Depends(get_session),
):
    """The shopper's orders, newest first"""
    try:
        return await session.client.get_orders(page=page, limit=limit)
    except CommerceAPIError as e:
        raise api_error(e, "Failed to load orders")


@router.get("/verify-payment/{reference}")
async def verify_payment(
    reference: str,
    session: ShopperSession = Depends(get_session),
):
    """Confirm a payment after the gateway redirects the shopper back"""
    try:
        result = await session.client.verify_payment(reference)
    except CommerceAPIError as e:
        raise api_error(e, "Failed to verify payment")
    return {**result, "redirect_to": "/orders"}


@router.get("/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    session: ShopperSession = Depends(get_session),
):
    """Get order details"""
    try:
        return Order.model_validate(await session.client.get_order(order_id))
    except CommerceAPIError as e:
        raise api_error(e, "Failed to load order")
