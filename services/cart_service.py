"""
Cart service: the single writer for one cart's item list.

Adding copies the pricing fields of an Estimate into a CartItem; the
Estimate itself is dropped. Totals are always recomputed from the items by
compute_cart_totals(), never cached.

Thread Safety:
    - All mutations go through a threading.Lock
    - items returns a tuple snapshot, so readers never see a half-applied
      change

Usage:
    cart = CartService.from_session(catalog, session.get("cart"))
    item = cart.add(estimate, title="Name tile")
    session["cart"] = cart.to_session()
"""

from __future__ import annotations

import threading
import uuid
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import CartItemNotFoundError
from logging_config import get_logger
from models.cart import CartItem, CartTotals
from models.estimate import Estimate
from modules.cart_totals import compute_cart_totals
from modules.catalog import PriceCatalog


# Module logger
logger = get_logger(__name__)


class CartService:
    """
    Owns the items of one cart.

    Attributes:
        catalog: Catalog used for cart-level shipping
        items: Snapshot of the current items, in insertion order
        is_empty: Whether the cart has no items
    """

    def __init__(self, catalog: PriceCatalog, items: Optional[List[CartItem]] = None):
        self.catalog = catalog
        self._items: List[CartItem] = list(items or [])
        self._lock = threading.Lock()

    @property
    def items(self) -> Tuple[CartItem, ...]:
        with self._lock:
            return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return len(self._items) == 0

    def add(self, estimate: Estimate, title: str, note: str = "") -> CartItem:
        """
        Add a priced line to the cart.

        The estimate's discount is frozen into the item; later catalog
        changes do not alter it.

        Args:
            estimate: Estimate produced by LineEstimator
            title: Display title for the line
            note: Optional customer note

        Returns:
            The new CartItem
        """
        item = CartItem(
            id=uuid.uuid4().hex,
            title=title,
            qty=estimate.quantity,
            unit=estimate.unit,
            option_total=estimate.option_total,
            discount=estimate.discount_amount,
            note=note,
            extras=tuple(estimate.extras),
        )
        with self._lock:
            self._items.append(item)
            count = len(self._items)

        logger.info(f"Cart item {item.id[:8]} added: {title!r} x{item.qty} ({count} item(s) in cart)")
        return item

    def remove(self, item_id: str) -> CartItem:
        """
        Remove an item by id.

        Raises:
            CartItemNotFoundError: If no item has this id
        """
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == item_id:
                    del self._items[index]
                    break
            else:
                raise CartItemNotFoundError(item_id)
            count = len(self._items)

        logger.info(f"Cart item {item_id[:8]} removed ({count} item(s) left)")
        return item

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
        logger.info("Cart cleared")

    def totals(self) -> CartTotals:
        return compute_cart_totals(self.items, self.catalog)

    def to_session(self) -> List[Dict[str, Any]]:
        """Convert to a list of dicts for Flask session storage."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_session(cls, catalog: PriceCatalog, data: Optional[List[Dict[str, Any]]]) -> "CartService":
        """Rebuild a cart from session data; None means an empty cart."""
        return cls(catalog, [CartItem.from_dict(entry) for entry in data or []])
