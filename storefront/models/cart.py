"""Cart models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional

from .product import Product


class CartLineItem(BaseModel):
    """
    One product + quantity row of the shopper's cart.

    ``id`` identifies the server-side cart row and is distinct from
    ``product_id``. ``product`` is a denormalized snapshot used for display
    and totals; the API sends it as ``products``.
    """
    id: str
    product_id: str
    quantity: int = Field(ge=1)
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    product: Optional[Product] = Field(default=None, alias="products")

    class Config:
        populate_by_name = True

    @property
    def unit_price(self) -> float:
        if self.product is None or self.product.price is None:
            return 0.0
        return self.product.price

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity; 0 removes the item"""
    quantity: int = Field(ge=0)


class CartResponse(BaseModel):
    """Cart snapshot with derived values"""
    items: list[CartLineItem]
    subtotal: float
    item_count: int
    message: Optional[str] = None
