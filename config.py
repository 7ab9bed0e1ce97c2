"""
Configuration for TileOrderWeb.

Prices are not configured here. They live in the price catalog, which is
either the built-in default or a JSON file named by CATALOG_PATH.
"""

import os

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "tile_order_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Price Catalog
    # ==========================================================================
    # CATALOG_PATH: JSON catalog file (see PriceCatalog.to_dict for the shape).
    #   Empty uses the built-in catalog. The catalog is validated at startup
    #   and the app refuses to start if it is incomplete.
    # ==========================================================================
    CATALOG_PATH = os.environ.get("CATALOG_PATH", "")

    # ==========================================================================
    # Order Limits
    # ==========================================================================
    MAX_QUANTITY = int(os.environ.get("MAX_QUANTITY", "999"))
    MAX_TITLE_LENGTH = int(os.environ.get("MAX_TITLE_LENGTH", "120"))
    MAX_NOTE_LENGTH = int(os.environ.get("MAX_NOTE_LENGTH", "1000"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    ENVIRONMENT = "production"
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    ENVIRONMENT = "testing"
    SECRET_KEY = "test-secret-key"
    CATALOG_PATH = ""
    MAX_QUANTITY = 999
