"""
Cart data models.

A CartItem is created from an Estimate on "add to cart" and keeps only the
fields cart pricing needs plus display metadata. Its discount is frozen at
that moment and is never recomputed from the current catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any, Tuple

from .estimate import ExtraRow


@dataclass(frozen=True)
class CartItem:
    """One line in the cart."""

    id: str
    title: str
    qty: int
    unit: int
    option_total: int
    discount: int
    note: str = ""
    extras: Tuple[ExtraRow, ...] = field(default_factory=tuple)
    """Receipt copy of the estimate breakdown; not used for pricing."""

    @property
    def pre_discount(self) -> int:
        """Merchandise amount for this line before its discount."""
        return self.qty * self.unit + self.option_total

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for session storage."""
        return {
            "id": self.id,
            "title": self.title,
            "qty": self.qty,
            "unit": self.unit,
            "option_total": self.option_total,
            "discount": self.discount,
            "note": self.note,
            "extras": [row.to_dict() for row in self.extras],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        """Create from dictionary (e.g., from session)."""
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            qty=int(data.get("qty", 1)),
            unit=int(data.get("unit", 0)),
            option_total=int(data.get("option_total", 0)),
            discount=int(data.get("discount", 0)),
            note=data.get("note", ""),
            extras=tuple(ExtraRow.from_dict(row) for row in data.get("extras", [])),
        )


@dataclass(frozen=True)
class CartTotals:
    """
    Cart-level totals.

    Shipping here is authoritative for the order; it is decided on the
    aggregate post-discount total and may differ from the per-line previews.
    """

    pre_merchandise: int
    discount: int
    after_discount: int
    shipping: int
    total: int
    item_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "pre_merchandise": self.pre_merchandise,
            "discount": self.discount,
            "after_discount": self.after_discount,
            "shipping": self.shipping,
            "total": self.total,
            "item_count": self.item_count,
            "is_empty": self.is_empty,
        }
