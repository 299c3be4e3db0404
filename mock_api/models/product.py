"""Product models for the mock commerce API"""

from pydantic import BaseModel, Field
from typing import Optional


class Category(BaseModel):
    id: str
    name: str


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    info: str = ""
    benefits: str = ""
    direction: str = ""
    precaution: str = ""
    category_id: str
    price: float = Field(gt=0)
    stock: int = Field(ge=0, default=100)
    image_url: Optional[str] = None
    created_at: str
    categories: Optional[Category] = None
