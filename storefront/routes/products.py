"""Catalog routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..core.session import ShopperSession
from ..models.product import Category, Product, ProductFilters
from ..services.commerce_client import CommerceAPIError
from .deps import get_session, api_error

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("")
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category id"),
    search: Optional[str] = Query(None, description="Search query"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort_by: Optional[str] = Query(None),
    sort_order: Optional[str] = Query(None, pattern="^(asc|desc)$"),
    session: ShopperSession = Depends(get_session),
):
    """Browse the catalog"""
    filters = ProductFilters(
        category=category,
        search=search,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    try:
        data = await session.client.get_products(filters)
    except CommerceAPIError as e:
        raise api_error(e, "Failed to load products")

    return {
        **data,
        "products": [Product.model_validate(p) for p in data.get("products", [])],
    }


@router.get("/categories", response_model=list[Category])
async def list_categories(session: ShopperSession = Depends(get_session)):
    """List all product categories"""
    try:
        return await session.client.get_categories()
    except CommerceAPIError as e:
        raise api_error(e, "Failed to load categories")


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, session: ShopperSession = Depends(get_session)):
    """Get a product by ID"""
    try:
        return await session.client.get_product(product_id)
    except CommerceAPIError as e:
        raise api_error(e, "Failed to load product")
