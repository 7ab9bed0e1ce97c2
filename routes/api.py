"""
API routes (operational endpoints).

Handles:
- /health - Health check endpoint
"""

from flask import Blueprint, current_app

from core.exceptions import CatalogError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with catalog status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    price_catalog = current_app.config.get("PRICE_CATALOG")
    if price_catalog is None:
        health_status["checks"]["catalog"] = "not_loaded"
        health_status["status"] = "degraded"
    else:
        try:
            price_catalog.validate()
            health_status["checks"]["catalog"] = "ok"
        except CatalogError as e:
            logger.error(f"Catalog failed validation: {e}")
            health_status["checks"]["catalog"] = "invalid"
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
