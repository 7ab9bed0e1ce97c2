"""
Services layer for TileOrderWeb.

This module contains the business logic services:
- CartService: Add/remove cart items and compute cart totals

The cart lives in the Flask session and is rebuilt per request, so each
request owns its CartService exclusively.
"""

from .cart_service import CartService

__all__ = [
    "CartService",
]
