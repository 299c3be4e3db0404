"""Checkout API routes for the storefront"""

from fastapi import APIRouter, HTTPException, Depends

from ..core.session import ShopperSession
from ..models.checkout import CheckoutDraft, QuoteRequest
from ..services.checkout import CheckoutError, CheckoutErrorKind
from ..services.pricing import NIGERIAN_STATES, get_delivery_fee_info, format_currency
from .deps import get_session

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])

ERROR_STATUS = {
    CheckoutErrorKind.EMPTY_CART: 400,
    CheckoutErrorKind.INVALID_DRAFT: 400,
    CheckoutErrorKind.NOT_AUTHENTICATED: 401,
    CheckoutErrorKind.STOCK_CONFLICT: 409,
    CheckoutErrorKind.ORDER_FAILED: 502,
}


@router.get("/states")
async def list_states():
    """Selectable delivery states with their fees"""
    return {
        "states": [
            {"name": state, **_fee_info(state)}
            for state in NIGERIAN_STATES
        ],
    }


def _fee_info(state: str) -> dict:
    info = get_delivery_fee_info(state)
    return {"delivery_fee": info.fee, "label": info.label, "tier": info.tier.value}


@router.post("/validate")
async def validate_draft(
    draft: CheckoutDraft,
    session: ShopperSession = Depends(get_session),
):
    """Check the delivery form without placing an order"""
    result = session.checkout.validate(draft)
    return {"valid": result.is_valid, "errors": result.errors}


@router.post("/quote")
async def quote(
    request: QuoteRequest,
    session: ShopperSession = Depends(get_session),
):
    """Subtotal, delivery fee and total for the current cart"""
    totals = session.checkout.quote(request.state)
    return {
        "subtotal": totals.subtotal,
        "delivery_fee": totals.delivery_fee,
        "total": totals.total,
        "label": get_delivery_fee_info(request.state).label,
        "formatted_total": format_currency(totals.total),
    }


@router.post("")
async def submit_checkout(
    draft: CheckoutDraft,
    session: ShopperSession = Depends(get_session),
):
    """
    Place the order.

    On success the caller redirects the shopper to ``authorization_url``.
    On failure ``redirect_to`` names the page to send them to instead, if any.
    """
    try:
        handoff = await session.checkout.submit(draft)
    except CheckoutError as e:
        raise HTTPException(
            status_code=ERROR_STATUS[e.kind],
            detail={
                "kind": e.kind.value,
                "message": e.message,
                "errors": e.errors,
                "redirect_to": e.redirect_to.value if e.redirect_to else None,
            },
        )

    return {
        "authorization_url": handoff.authorization_url,
        "reference": handoff.reference,
        "order_id": handoff.order_id,
    }
