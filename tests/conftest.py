"""Shared fixtures for TileOrderWeb tests."""

import dataclasses

import pytest

from app import create_app
from models.estimate import EstimateInput, Flow
from modules.catalog import DEFAULT_CATALOG, PricedEntry
from modules.estimator import LineEstimator
from services.cart_service import CartService


@pytest.fixture
def catalog():
    """The built-in price catalog."""
    return DEFAULT_CATALOG


@pytest.fixture
def estimator(catalog):
    """Line estimator bound to the built-in catalog."""
    return LineEstimator(catalog)


@pytest.fixture
def cart(catalog):
    """An empty cart."""
    return CartService(catalog)


@pytest.fixture
def make_input():
    """Factory for EstimateInput with original_single defaults."""
    def _make(**overrides):
        overrides.setdefault("flow", Flow.ORIGINAL_SINGLE)
        return EstimateInput(**overrides)
    return _make


@pytest.fixture
def catalog_with():
    """Factory for a copy of the built-in catalog with some option prices changed."""
    def _with(**prices):
        options = dict(DEFAULT_CATALOG.options)
        for key, price in prices.items():
            options[key] = PricedEntry(options[key].label, price)
        return dataclasses.replace(DEFAULT_CATALOG, options=options)
    return _with


@pytest.fixture
def app():
    """Flask app configured for testing."""
    return create_app("config.TestingConfig")


@pytest.fixture
def client(app):
    """Flask test client (keeps the session cookie between requests)."""
    return app.test_client()
