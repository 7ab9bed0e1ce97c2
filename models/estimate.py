"""
Estimate data models.

These models represent one line item's configuration as it flows through
the pricing engine: selection -> EstimateInput -> Estimate.

All models here are frozen dataclasses. An EstimateInput is recomputed on
every selection change, and an Estimate is discarded once the fields the
cart needs have been copied into a CartItem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Tuple


class Flow(Enum):
    """
    Top-level product category.

    Selects the catalog entry and the discount schedule.
    """

    ORIGINAL_SINGLE = "original_single"
    """Custom name tile, sold individually."""

    FULLSET = "fullset"
    """Complete custom tile set."""

    REGULAR = "regular"
    """Stock tile, sold individually."""


class Variant(Enum):
    """Size variant of a tile."""

    STANDARD = "standard"
    """28 mm tile."""

    MM30 = "mm30"
    """30 mm tile."""

    DEFAULT = "default"
    """Only valid for the regular flow."""


class DesignType(Enum):
    """How the tile face is designed; selects the fee family."""

    NAME_PRINT = "name_print"
    """Printed name text with chosen colors."""

    BRING_OWN = "bring_own"
    """Customer-supplied artwork, charged a submission fee."""

    COMMISSION = "commission"
    """Commissioned artwork, quoted manually."""


class ColorKey(Enum):
    """Ink colors available for name printing."""

    BLACK = "black"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    PINK = "pink"
    RAINBOW = "rainbow"


@dataclass(frozen=True)
class EstimateInput:
    """
    Immutable snapshot of one line item's configuration.

    Counts are stored as given; the estimator clamps them.
    """

    flow: Flow
    variant: Variant = Variant.STANDARD
    quantity: int = 1
    design_type: DesignType = DesignType.NAME_PRINT
    use_unified_color: bool = True
    unified_color: ColorKey = ColorKey.BLACK
    char_colors: Tuple[Optional[ColorKey], ...] = ()
    """Per-character colors; only the first len(name_text) are used. None means the catalog default."""

    name_text: str = ""
    bring_own_color_count: int = 1
    keyholder_qty: int = 0
    gift_box_qty: int = 0


@dataclass(frozen=True)
class ExtraRow:
    """
    One itemized fee in an estimate breakdown.

    Design rows are per piece and scale with the line quantity; physical
    option rows are already multiplied by the option's own quantity.
    """

    label: str
    amount: int
    per_piece: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses and session storage."""
        return {
            "label": self.label,
            "amount": self.amount,
            "per_piece": self.per_piece,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtraRow":
        """Create from dictionary (e.g., from session)."""
        return cls(
            label=data.get("label", ""),
            amount=int(data.get("amount", 0)),
            per_piece=bool(data.get("per_piece", True)),
        )


@dataclass(frozen=True)
class Estimate:
    """
    Priced line item.

    The shipping figure is a preview for this line in isolation. Cart
    totals decide shipping for the order.
    """

    unit: int
    """Base price per piece."""

    quantity: int
    """Main quantity after clamping."""

    extras: Tuple[ExtraRow, ...] = field(default_factory=tuple)
    """Design rows first, then option rows."""

    option_total: int = 0
    discount_rate: float = 0.0
    discount_amount: int = 0
    pre_discount: int = 0
    merchandise_subtotal: int = 0
    shipping: int = 0
    total: int = 0

    requires_quote: bool = False
    """Commissioned designs are priced manually on top of this estimate."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "unit": self.unit,
            "quantity": self.quantity,
            "extras": [row.to_dict() for row in self.extras],
            "option_total": self.option_total,
            "discount_rate": self.discount_rate,
            "discount_amount": self.discount_amount,
            "pre_discount": self.pre_discount,
            "merchandise_subtotal": self.merchandise_subtotal,
            "shipping": self.shipping,
            "total": self.total,
            "requires_quote": self.requires_quote,
        }
