"""Pricing modules for the TileOrderWeb storefront."""

__all__ = [
    "cart_totals",
    "catalog",
    "estimator",
    "formatting",
    "selection",
]
