"""Mock product database"""

from datetime import datetime
from typing import Optional

from ..models.product import Category, Product

CATEGORIES: dict[str, Category] = {
    "cat-supplements": Category(id="cat-supplements", name="Supplements"),
    "cat-herbal": Category(id="cat-herbal", name="Herbal Remedies"),
    "cat-personal-care": Category(id="cat-personal-care", name="Personal Care"),
}

SEED_PRODUCTS = [
    {
        "id": "prod-001",
        "name": "Moringa Leaf Capsules",
        "info": "Cold-dried moringa leaf powder, 500mg per capsule.",
        "benefits": "Rich in antioxidants, iron and vitamin C.",
        "direction": "Take two capsules daily after a meal.",
        "precaution": "Consult a doctor if pregnant or nursing.",
        "category_id": "cat-supplements",
        "price": 8500.0,
        "stock": 40,
        "image_url": "/static/images/moringa.jpg",
    },
    {
        "id": "prod-002",
        "name": "Bitter Leaf Detox Tea",
        "info": "Loose-leaf blend of bitter leaf, ginger and lemongrass.",
        "benefits": "Supports digestion and blood sugar balance.",
        "direction": "Steep one teaspoon in hot water for five minutes.",
        "precaution": "Not recommended for children under 12.",
        "category_id": "cat-herbal",
        "price": 4500.0,
        "stock": 25,
        "image_url": "/static/images/bitter-leaf-tea.jpg",
    },
    {
        "id": "prod-003",
        "name": "Shea Butter Body Cream",
        "info": "Unrefined shea butter whipped with coconut oil.",
        "benefits": "Deep moisturizing for dry skin.",
        "direction": "Apply to clean skin twice daily.",
        "precaution": "For external use only.",
        "category_id": "cat-personal-care",
        "price": 6000.0,
        "stock": 60,
        "image_url": "/static/images/shea-cream.jpg",
    },
    {
        "id": "prod-004",
        "name": "Black Seed Oil",
        "info": "Cold-pressed Nigella sativa oil, 100ml.",
        "benefits": "Traditional support for immunity and respiration.",
        "direction": "Take one teaspoon daily.",
        "precaution": "Discontinue if irritation occurs.",
        "category_id": "cat-herbal",
        "price": 12000.0,
        "stock": 3,
        "image_url": "/static/images/black-seed-oil.jpg",
    },
]


class ProductDatabase:
    """In-memory product catalog"""

    def __init__(self):
        now = datetime.utcnow().isoformat()
        self.categories: dict[str, Category] = dict(CATEGORIES)
        self.products: dict[str, Product] = {
            seed["id"]: Product(
                **seed,
                created_at=now,
                categories=self.categories[seed["category_id"]],
            )
            for seed in SEED_PRODUCTS
        }

    def add_product(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def search_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> tuple[list[Product], int]:
        """
        Filter, sort and paginate the catalog.

        Returns:
            Tuple of (products on the requested page, total matches)
        """
        results = list(self.products.values())

        if category:
            results = [p for p in results if p.category_id == category]

        if search:
            search_lower = search.lower()
            results = [
                p for p in results
                if search_lower in p.name.lower() or search_lower in p.info.lower()
            ]

        if sort_by in ("name", "price", "created_at"):
            results.sort(key=lambda p: getattr(p, sort_by), reverse=sort_order == "desc")

        total = len(results)
        offset = (page - 1) * limit
        return results[offset : offset + limit], total

    def update_stock(self, product_id: str, quantity_change: int) -> bool:
        """
        Update product stock.

        Args:
            product_id: Product to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.products.get(product_id)
        if not product:
            return False

        new_quantity = product.stock + quantity_change
        if new_quantity < 0:
            return False

        product.stock = new_quantity
        return True
