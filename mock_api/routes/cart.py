"""Cart API routes for the mock commerce API"""

from fastapi import APIRouter, Depends

from ..database import MockDatabase
from ..errors import APIError
from ..models.cart import AddToCartRequest, UpdateCartItemRequest
from ..models.user import User
from .deps import get_db, current_user

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _insufficient_stock(available: int) -> APIError:
    return APIError(
        400,
        f"Insufficient stock. Available: {available}",
        code="INSUFFICIENT_STOCK",
    )


@router.get("")
async def get_cart(
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    """Cart rows with a product snapshot under ``products``"""
    cart = []
    for row in db.carts.list_for_user(user.id):
        product = db.products.get_product(row.product_id)
        cart.append({**row.model_dump(), "products": product.model_dump() if product else None})
    return {"cart": cart}


@router.post("/add")
async def add_to_cart(
    request: AddToCartRequest,
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    product = db.products.get_product(request.product_id)
    if not product:
        raise APIError(404, "Product not found")

    in_cart = sum(
        row.quantity for row in db.carts.list_for_user(user.id)
        if row.product_id == product.id
    )
    if in_cart + request.quantity > product.stock:
        raise _insufficient_stock(product.stock)

    row = db.carts.add_item(user.id, product.id, request.quantity)
    return {"message": f"Added {request.quantity}x {product.name} to cart", "item": row}


@router.put("/update/{row_id}")
async def update_cart_item(
    row_id: str,
    request: UpdateCartItemRequest,
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    row = db.carts.get_row(user.id, row_id)
    if row is None:
        raise APIError(404, "Cart item not found")

    product = db.products.get_product(row.product_id)
    if product is None or request.quantity > product.stock:
        raise _insufficient_stock(product.stock if product else 0)

    row = db.carts.update_quantity(user.id, row_id, request.quantity)
    return {"message": "Cart updated", "item": row}


@router.delete("/remove/{row_id}")
async def remove_from_cart(
    row_id: str,
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    if not db.carts.remove_item(user.id, row_id):
        raise APIError(404, "Cart item not found")
    return {"message": "Item removed"}


@router.delete("/clear")
async def clear_cart(
    user: User = Depends(current_user),
    db: MockDatabase = Depends(get_db),
):
    removed = db.carts.clear(user.id)
    return {"message": "Cart cleared", "removed": removed}
