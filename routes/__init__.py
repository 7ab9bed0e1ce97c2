"""
Flask route blueprints for TileOrderWeb.

This module contains all route handlers organized by functionality:
- estimate: Catalog data and live price estimates
- cart: Add, remove and total cart items
- api: Operational endpoints (health)

Each blueprint is registered with the Flask app in create_app().
"""

from .estimate import estimate_bp
from .cart import cart_bp
from .api import api_bp

__all__ = [
    "estimate_bp",
    "cart_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(estimate_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(api_bp)
