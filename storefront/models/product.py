"""Product models for the storefront"""

from pydantic import BaseModel
from typing import Optional


class Category(BaseModel):
    """Product category"""
    id: str
    name: str


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str = ""
    info: str = ""
    benefits: str = ""
    direction: str = ""
    precaution: str = ""
    category_id: Optional[str] = None
    # Missing prices contribute nothing to cart totals
    price: Optional[float] = None
    stock: int = 0
    image_url: Optional[str] = None
    created_at: Optional[str] = None
    categories: Optional[Category] = None


class ProductFilters(BaseModel):
    """Catalog query filters"""
    category: Optional[str] = None
    search: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None

    def to_params(self) -> dict[str, str]:
        """Query parameters in the API's camelCase naming, empty values dropped"""
        params = {
            "category": self.category,
            "search": self.search,
            "page": self.page,
            "limit": self.limit,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
        }
        return {key: str(value) for key, value in params.items() if value}
