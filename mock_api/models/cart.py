"""Cart models for the mock commerce API"""

from pydantic import BaseModel, Field


class CartRow(BaseModel):
    """One stored cart line"""
    id: str
    user_id: str
    product_id: str
    quantity: int = Field(gt=0)
    created_at: str


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, gt=0)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(gt=0)
