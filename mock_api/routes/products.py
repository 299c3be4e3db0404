"""Product API routes for the mock commerce API"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..database import MockDatabase
from ..errors import APIError
from .deps import get_db

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("")
async def list_products(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sortBy: Optional[str] = Query(None),
    sortOrder: str = Query("asc"),
    db: MockDatabase = Depends(get_db),
):
    """Filter, sort and paginate the catalog"""
    products, total = db.products.search_products(
        category=category,
        search=search,
        page=page,
        limit=limit,
        sort_by=sortBy,
        sort_order=sortOrder,
    )
    return {"products": products, "total": total, "page": page, "limit": limit}


@router.get("/categories/all")
async def list_categories(db: MockDatabase = Depends(get_db)):
    return {"categories": list(db.products.categories.values())}


@router.get("/{product_id}")
async def get_product(product_id: str, db: MockDatabase = Depends(get_db)):
    product = db.products.get_product(product_id)
    if not product:
        raise APIError(404, "Product not found")
    return {"product": product}
