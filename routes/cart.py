"""
Cart routes.

Handles:
- GET    /api/cart           - Items and cart totals
- POST   /api/cart           - Price a selection and add it to the cart
- DELETE /api/cart/<item_id> - Remove an item

The cart lives in the Flask session. Cart totals (including shipping) are
authoritative; the shipping shown on a single estimate is only a preview.
"""

import bleach
from flask import Blueprint, current_app, jsonify, request, session

from logging_config import get_logger
from modules.estimator import resolve_variant
from modules.formatting import format_yen
from modules.selection import parse_estimate_input, validate_selection
from services.cart_service import CartService


# Module logger
logger = get_logger(__name__)

cart_bp = Blueprint("cart", __name__)


def _sanitize_text(text: str, max_length: int = None) -> str:
    """Sanitize user input text."""
    if not text:
        return ""
    text = str(text).strip()
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


def _load_cart() -> CartService:
    return CartService.from_session(current_app.config["PRICE_CATALOG"], session.get("cart"))


def _save_cart(cart: CartService) -> None:
    session["cart"] = cart.to_session()
    session.modified = True


def _cart_payload(cart: CartService) -> dict:
    totals = cart.totals()
    return {
        "items": [item.to_dict() for item in cart.items],
        "totals": totals.to_dict(),
        "display": {
            "subtotal": format_yen(totals.after_discount),
            "discount": format_yen(totals.discount),
            "shipping": format_yen(totals.shipping),
            "total": format_yen(totals.total),
        },
    }


@cart_bp.route("/api/cart", methods=["GET"])
def view_cart():
    return jsonify(_cart_payload(_load_cart()))


@cart_bp.route("/api/cart", methods=["POST"])
def add_to_cart():
    """
    Add the posted selection to the cart.

    The line is re-priced server-side; client-side figures are never
    trusted. Its discount is frozen at this point.
    """
    data = request.get_json(silent=True) or {}
    price_catalog = current_app.config["PRICE_CATALOG"]
    estimator = current_app.config["ESTIMATOR"]

    selection = parse_estimate_input(data)
    errors = validate_selection(selection, price_catalog, current_app.config.get("MAX_QUANTITY"))
    if errors:
        logger.warning(f"Add to cart rejected: {errors}")
        return jsonify({"error": "invalid_selection", "messages": errors}), 400

    result = estimator.compute_estimate(selection)

    title = _sanitize_text(data.get("title", ""), current_app.config.get("MAX_TITLE_LENGTH"))
    if not title:
        title = price_catalog.product_label(
            selection.flow, resolve_variant(selection.flow, selection.variant)
        )
    note = _sanitize_text(data.get("note", ""), current_app.config.get("MAX_NOTE_LENGTH"))

    cart = _load_cart()
    item = cart.add(result, title=title, note=note)
    _save_cart(cart)

    payload = _cart_payload(cart)
    payload["item"] = item.to_dict()
    return jsonify(payload), 201


@cart_bp.route("/api/cart/<item_id>", methods=["DELETE"])
def remove_from_cart(item_id: str):
    """Remove an item; CartItemNotFoundError becomes a 404."""
    cart = _load_cart()
    cart.remove(item_id)
    _save_cart(cart)
    return jsonify(_cart_payload(cart))
