"""
Data models for TileOrderWeb.

This module contains immutable dataclasses for:
- EstimateInput: One line item's selections
- Estimate: Priced line item with itemized extras
- CartItem: Frozen pricing fields copied from an Estimate on add-to-cart
- CartTotals: Aggregate totals for the cart
"""

from .estimate import (
    Flow,
    Variant,
    DesignType,
    ColorKey,
    EstimateInput,
    ExtraRow,
    Estimate,
)
from .cart import CartItem, CartTotals

__all__ = [
    # Selection enums
    "Flow",
    "Variant",
    "DesignType",
    "ColorKey",
    # Estimate models
    "EstimateInput",
    "ExtraRow",
    "Estimate",
    # Cart models
    "CartItem",
    "CartTotals",
]
