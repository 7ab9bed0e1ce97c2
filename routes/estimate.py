"""
Estimate routes.

Handles:
- /api/catalog  - Products, option fees, shipping and discount tiers
- /api/estimate - Live price estimate for the current selection
"""

from flask import Blueprint, current_app, jsonify, request

from logging_config import get_logger
from models.estimate import ColorKey
from modules.estimator import line_colors
from modules.formatting import format_yen
from modules.selection import parse_estimate_input, validate_selection


# Module logger
logger = get_logger(__name__)

estimate_bp = Blueprint("estimate", __name__)


@estimate_bp.route("/api/catalog", methods=["GET"])
def catalog():
    """Catalog data for building the product form."""
    price_catalog = current_app.config["PRICE_CATALOG"]
    data = price_catalog.to_dict()
    data["palette"] = [color.value for color in ColorKey]
    return jsonify(data)


@estimate_bp.route("/api/estimate", methods=["POST"])
def estimate():
    """
    Price the posted selection.

    Always answers with an estimate for a well-formed selection. Storefront
    rules that would block add-to-cart are returned as warnings.
    """
    price_catalog = current_app.config["PRICE_CATALOG"]
    estimator = current_app.config["ESTIMATOR"]

    selection = parse_estimate_input(request.get_json(silent=True) or {})
    result = estimator.compute_estimate(selection)

    preview_lines = [
        [{"char": char, "color": color.value} for char, color in line]
        for line in line_colors(
            selection.name_text, selection.char_colors, price_catalog.default_color
        )
    ]

    return jsonify({
        "estimate": result.to_dict(),
        "display": build_display(result),
        "preview_lines": preview_lines,
        "warnings": validate_selection(
            selection, price_catalog, current_app.config.get("MAX_QUANTITY")
        ),
    })


def build_display(result) -> dict:
    """Yen-formatted strings for the summary bar."""
    return {
        "unit": format_yen(result.unit),
        "option_total": format_yen(result.option_total),
        "discount": format_yen(result.discount_amount),
        "subtotal": format_yen(result.merchandise_subtotal),
        "shipping": format_yen(result.shipping),
        "total": format_yen(result.total),
        "extras": [
            {"label": row.label, "amount": format_yen(row.amount)} for row in result.extras
        ],
    }
