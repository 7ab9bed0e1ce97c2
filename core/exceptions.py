"""
Custom exceptions for TileOrderWeb.

Exception Hierarchy:
    TileOrderError (base)
    ├── CatalogError               - Price catalog defect (startup failure)
    │   ├── UnknownCatalogKeyError - Lookup of an undefined product or option
    │   └── CatalogValidationError - Catalog failed validation at load time
    ├── InvalidSelectionError      - Request payload names an unknown choice
    └── CartItemNotFoundError      - Remove/lookup of an id not in the cart

Usage:
    Catalog errors indicate an internal inconsistency and cause the app to
    fail fast. Selection and cart errors are request-level and are mapped to
    JSON 400/404 responses.
"""

from typing import Optional, Dict, Any, List


class TileOrderError(Exception):
    """
    Base exception for all TileOrderWeb errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# CATALOG ERRORS - Programming/configuration defects, never user input
# =============================================================================

class CatalogError(TileOrderError):
    """Base class for price catalog defects."""


class UnknownCatalogKeyError(CatalogError):
    """
    A product or option key is not defined in the price catalog.

    This is never caused by user input: selections are parsed into the
    closed enumerations before lookup, so a miss means the catalog and the
    estimator disagree.
    """

    def __init__(self, kind: str, key: Any):
        message = f"Price catalog has no {kind} entry for {key!r}"
        details = {
            "kind": kind,
            "key": str(key),
            "resolution": "Add the entry to the catalog or fix CATALOG_PATH",
        }
        super().__init__(message, details)
        self.kind = kind
        self.key = key


class CatalogValidationError(CatalogError):
    """
    The price catalog failed validation.

    Raised by PriceCatalog.validate() at application start. Carries every
    problem found, not just the first.
    """

    def __init__(self, problems: List[str], source: Optional[str] = None):
        message = f"Price catalog is invalid ({len(problems)} problem(s))"
        details: Dict[str, Any] = {"problems": list(problems)}
        if source:
            details["source"] = source
        super().__init__(message, details)
        self.problems = list(problems)
        self.source = source


# =============================================================================
# REQUEST ERRORS - Request fails, application continues
# =============================================================================

class InvalidSelectionError(TileOrderError):
    """
    A request payload names a flow, variant, design type or color that does
    not exist.

    Quantities never raise this; they are clamped instead.
    """

    def __init__(self, field_name: str, value: Any, allowed: List[str]):
        message = f"Invalid {field_name}: {value!r}"
        details = {
            "field": field_name,
            "value": value,
            "allowed": list(allowed),
        }
        super().__init__(message, details)
        self.field_name = field_name
        self.value = value
        self.allowed = list(allowed)


class CartItemNotFoundError(TileOrderError):
    """The cart has no item with the given identifier."""

    def __init__(self, item_id: str):
        message = f"Cart item not found: {item_id}"
        super().__init__(message, {"item_id": item_id})
        self.item_id = item_id
