"""
Cart Store

Single in-memory source of truth for one shopper's cart, kept consistent
with the remote cart resource. Everything that changes the cart goes
through a CartStore so the local snapshot and the server never drift
further apart than one in-flight request.
"""

import asyncio
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ..models.cart import CartLineItem
from .commerce_client import CommerceClient, CommerceAPIError

logger = logging.getLogger(__name__)

CartListener = Callable[[tuple[CartLineItem, ...]], None]


class CartError(Exception):
    """A cart mutation failed; ``message`` is safe to show the shopper"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

    @classmethod
    def from_api_error(cls, error: CommerceAPIError, fallback: str) -> "CartError":
        return cls(
            message=error.message or fallback,
            status_code=error.status_code,
            code=error.code,
        )


class CartStore:
    """
    Shopper cart state.

    Reads (``fetch_cart``, ``clear_cart``) degrade gracefully and only log,
    so a flaky API never blanks a cart the shopper can still see. Mutations
    raise ``CartError`` so the caller can tell the shopper what went wrong.

    Mutations that target the same line item run one at a time; everything
    else interleaves and the last response to arrive wins.
    """

    def __init__(self, client: CommerceClient):
        self.client = client
        self.loading = False
        self._items: tuple[CartLineItem, ...] = ()
        self._listeners: list[CartListener] = []
        self._item_locks: dict[str, asyncio.Lock] = {}

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return self._items

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Call ``listener`` with the new snapshot after every change"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_items(self, items) -> None:
        self._items = tuple(items)
        for listener in list(self._listeners):
            listener(self._items)

    def _lock_for(self, line_item_id: str) -> asyncio.Lock:
        return self._item_locks.setdefault(line_item_id, asyncio.Lock())

    async def fetch_cart(self) -> None:
        """Replace the local snapshot with the server's cart"""
        self.loading = True
        try:
            raw_items = await self.client.get_cart()
        except CommerceAPIError as e:
            # Keep the last known cart rather than showing an empty one
            logger.error(f"Fetch cart error: {e}")
            return
        finally:
            self.loading = False

        self._set_items(self._parse_items(raw_items))

    def _parse_items(self, raw_items: list) -> list[CartLineItem]:
        """Validate rows one by one; a malformed row is skipped, not the whole cart"""
        items = []
        for raw in raw_items:
            try:
                items.append(CartLineItem.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed cart row: {e}")
        return items

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> None:
        """
        Add a product, then refetch the whole cart.

        Adding is not patched locally: the server may merge the product into
        an existing row or hold less stock than we last saw.
        """
        try:
            await self.client.add_to_cart(product_id, quantity)
        except CommerceAPIError as e:
            raise CartError.from_api_error(e, "Failed to add to cart") from e

        logger.info(f"Added {quantity}x {product_id} to cart")
        await self.fetch_cart()

    async def update_quantity(self, line_item_id: str, quantity: int) -> None:
        """
        Set a line item's quantity; 0 removes it.

        The server response is not refetched: only this row changes, and the
        stock ceiling is enforced where the quantity is chosen.
        """
        if quantity < 0:
            raise ValueError(f"quantity must be >= 0, got {quantity}")

        async with self._lock_for(line_item_id):
            if quantity == 0:
                await self._remove(line_item_id)
                return

            try:
                await self.client.update_cart_item(line_item_id, quantity)
            except CommerceAPIError as e:
                raise CartError.from_api_error(e, "Failed to update cart") from e

            self._set_items(
                item.model_copy(update={"quantity": quantity})
                if item.id == line_item_id
                else item
                for item in self._items
            )
            logger.info(f"Cart item {line_item_id} set to {quantity}")

    async def remove_item(self, line_item_id: str) -> None:
        """Remove a line item and drop it from the local snapshot"""
        async with self._lock_for(line_item_id):
            await self._remove(line_item_id)

    async def _remove(self, line_item_id: str) -> None:
        try:
            await self.client.remove_from_cart(line_item_id)
        except CommerceAPIError as e:
            raise CartError.from_api_error(e, "Failed to remove item") from e

        self._set_items(item for item in self._items if item.id != line_item_id)
        self._item_locks.pop(line_item_id, None)
        logger.info(f"Cart item {line_item_id} removed")

    def reset(self) -> None:
        """Forget the local snapshot without touching the server"""
        self._set_items(())

    async def clear_cart(self) -> None:
        """Empty the cart; failures are logged only"""
        try:
            await self.client.clear_cart()
        except CommerceAPIError as e:
            logger.error(f"Clear cart error: {e}")
            return

        self._set_items(())

    def get_cart_total(self) -> float:
        """Sum of price x quantity; items without a price count as 0"""
        return sum((item.line_total for item in self._items), 0.0)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)
