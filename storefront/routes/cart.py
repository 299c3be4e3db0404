"""Cart API routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Depends

from ..core.session import ShopperSession
from ..models.cart import AddToCartRequest, UpdateCartItemRequest, CartResponse
from ..services.cart_store import CartStore, CartError
from .deps import get_session, upstream_status

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _cart_response(cart: CartStore, message: Optional[str] = None) -> CartResponse:
    return CartResponse(
        items=list(cart.items),
        subtotal=cart.get_cart_total(),
        item_count=cart.get_item_count(),
        message=message,
    )


def _cart_error(error: CartError) -> HTTPException:
    return HTTPException(status_code=upstream_status(error.status_code), detail=error.message)


@router.get("", response_model=CartResponse)
async def get_cart(session: ShopperSession = Depends(get_session)):
    """Refresh and return the shopper's cart"""
    await session.cart.fetch_cart()
    return _cart_response(session.cart)


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    request: AddToCartRequest,
    session: ShopperSession = Depends(get_session),
):
    """Add a product to the cart"""
    try:
        await session.cart.add_to_cart(request.product_id, request.quantity)
    except CartError as e:
        raise _cart_error(e)
    return _cart_response(session.cart, message="Added to cart!")


@router.put("/items/{line_item_id}", response_model=CartResponse)
async def update_cart_item(
    line_item_id: str,
    request: UpdateCartItemRequest,
    session: ShopperSession = Depends(get_session),
):
    """Change a line item's quantity; 0 removes it"""
    try:
        await session.cart.update_quantity(line_item_id, request.quantity)
    except CartError as e:
        raise _cart_error(e)
    message = "Item removed" if request.quantity == 0 else "Cart updated"
    return _cart_response(session.cart, message=message)


@router.delete("/items/{line_item_id}", response_model=CartResponse)
async def remove_from_cart(
    line_item_id: str,
    session: ShopperSession = Depends(get_session),
):
    """Remove a line item"""
    try:
        await session.cart.remove_item(line_item_id)
    except CartError as e:
        raise _cart_error(e)
    return _cart_response(session.cart, message="Item removed")


@router.delete("", response_model=CartResponse)
async def clear_cart(session: ShopperSession = Depends(get_session)):
    """Clear all items from cart"""
    await session.cart.clear_cart()
    return _cart_response(session.cart)
