"""
TileOrderWeb - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config classes)
2. Loads and validates the price catalog (fail-fast)
3. Creates the line estimator
4. Registers route blueprints
5. Sets up error handlers and template filters

Everything the routes need is stored in app.config:
    PRICE_CATALOG - validated PriceCatalog (read-only)
    ESTIMATOR     - LineEstimator bound to that catalog

Carts live in the Flask session; no cart state is shared between requests.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from logging_config import setup_logging, get_logger
from core.exceptions import CatalogError, CartItemNotFoundError, InvalidSelectionError
from modules.catalog import load_catalog
from modules.estimator import LineEstimator
from modules.formatting import format_yen
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def create_app(config_object: object = "config.Config") -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: If the price catalog is missing entries or inconsistent, the
    app will not start.

    Args:
        config_object: Config class, or its import path

    Returns:
        Configured Flask application

    Raises:
        CatalogError: If the price catalog fails validation
    """
    # Use override=True so .env file always takes precedence over shell environment
    env_file = Path(__file__).parent / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting TileOrderWeb in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # PRICE CATALOG (FAIL-FAST)
    # =========================================================================

    try:
        price_catalog = load_catalog(app.config.get("CATALOG_PATH"))
    except CatalogError as e:
        logger.error(f"FATAL: Cannot start application - {e}")
        raise

    app.config["PRICE_CATALOG"] = price_catalog
    app.config["ESTIMATOR"] = LineEstimator(price_catalog)

    register_blueprints(app)

    app.add_template_filter(format_yen, "yen")

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(InvalidSelectionError)
    def handle_invalid_selection(e):
        logger.warning(f"Invalid selection: {e}")
        return jsonify({
            "error": "invalid_selection",
            "messages": [e.message],
            "details": e.details,
        }), 400

    @app.errorhandler(CartItemNotFoundError)
    def handle_cart_item_not_found(e):
        return jsonify({"error": "not_found", "messages": [e.message]}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.name.lower().replace(" ", "_"), "messages": [e.description]}), e.code

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({"error": "server_error", "messages": ["An unexpected error occurred."]}), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
