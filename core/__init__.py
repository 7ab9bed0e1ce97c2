"""
Core module for TileOrderWeb.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
"""

from .exceptions import (
    TileOrderError,
    CatalogError,
    UnknownCatalogKeyError,
    CatalogValidationError,
    InvalidSelectionError,
    CartItemNotFoundError,
)

__all__ = [
    "TileOrderError",
    "CatalogError",
    "UnknownCatalogKeyError",
    "CatalogValidationError",
    "InvalidSelectionError",
    "CartItemNotFoundError",
]
