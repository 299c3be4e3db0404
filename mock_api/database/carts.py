"""Cart storage for the mock commerce API"""

import uuid
from datetime import datetime
from typing import Optional

from ..models.cart import CartRow


class CartDatabase:
    """In-memory cart rows, one cart per user"""

    def __init__(self):
        self.rows: dict[str, CartRow] = {}

    def list_for_user(self, user_id: str) -> list[CartRow]:
        """Rows of a user's cart in insertion order"""
        return [row for row in self.rows.values() if row.user_id == user_id]

    def get_row(self, user_id: str, row_id: str) -> Optional[CartRow]:
        row = self.rows.get(row_id)
        if row is None or row.user_id != user_id:
            return None
        return row

    def add_item(self, user_id: str, product_id: str, quantity: int) -> CartRow:
        """Add a product, merging into an existing row for the same product"""
        existing = next(
            (row for row in self.list_for_user(user_id) if row.product_id == product_id),
            None,
        )
        if existing:
            existing.quantity += quantity
            return existing

        row = CartRow(
            id=str(uuid.uuid4()),
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            created_at=datetime.utcnow().isoformat(),
        )
        self.rows[row.id] = row
        return row

    def update_quantity(self, user_id: str, row_id: str, quantity: int) -> Optional[CartRow]:
        row = self.get_row(user_id, row_id)
        if row is None:
            return None
        row.quantity = quantity
        return row

    def remove_item(self, user_id: str, row_id: str) -> bool:
        if self.get_row(user_id, row_id) is None:
            return False
        del self.rows[row_id]
        return True

    def clear(self, user_id: str) -> int:
        """Remove every row of a user's cart"""
        row_ids = [row.id for row in self.list_for_user(user_id)]
        for row_id in row_ids:
            del self.rows[row_id]
        return len(row_ids)
