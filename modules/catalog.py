"""Price catalog: base tile prices, option fees, shipping and discount tiers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

from core.exceptions import CatalogValidationError, UnknownCatalogKeyError
from logging_config import get_logger
from models.estimate import ColorKey, Flow, Variant


logger = get_logger(__name__)


# Option keys the estimator looks up. A catalog missing any of these fails
# validation.
KEYHOLDER = "keyholder"
DESIGN_SUBMISSION_SINGLE = "design_submission_single"
DESIGN_SUBMISSION_FULLSET = "design_submission_fullset"
MULTI_COLOR = "multi_color"
RAINBOW = "rainbow"
GIFT_BOX = "gift_box"
BRING_OWN_COLOR_UNIT = "bring_own_color_unit"

REQUIRED_OPTIONS = (
    KEYHOLDER,
    DESIGN_SUBMISSION_SINGLE,
    DESIGN_SUBMISSION_FULLSET,
    MULTI_COLOR,
    RAINBOW,
    GIFT_BOX,
    BRING_OWN_COLOR_UNIT,
)

# (flow, variant) pairs the estimator can resolve to
REQUIRED_PRODUCTS = (
    (Flow.ORIGINAL_SINGLE, Variant.STANDARD),
    (Flow.ORIGINAL_SINGLE, Variant.MM30),
    (Flow.FULLSET, Variant.STANDARD),
    (Flow.FULLSET, Variant.MM30),
    (Flow.REGULAR, Variant.DEFAULT),
)


@dataclass(frozen=True)
class PricedEntry:
    """A labelled price in whole yen (tax included)."""

    label: str
    price: int


@dataclass(frozen=True)
class PriceCatalog:
    """
    Static price table.

    Pure data plus lookups. Swap the whole object to change prices; the
    estimator never hardcodes an amount.
    """

    products: Dict[Tuple[Flow, Variant], PricedEntry]
    options: Dict[str, PricedEntry]
    shipping_flat: int
    free_shipping_threshold: int
    discount_tiers: Dict[Flow, Tuple[Tuple[int, int], ...]]
    """Per flow, ascending (min_qty, percent) tiers. Only the highest reached tier applies."""

    default_color: ColorKey = ColorKey.BLACK
    """Color used for any character without an explicit color."""

    gift_box_variants: Tuple[Variant, ...] = field(default=(Variant.STANDARD, Variant.DEFAULT))
    """Variants the 4-tile gift box fits (the 28mm tiles)."""

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def unit_price(self, flow: Flow, variant: Variant) -> int:
        return self._product(flow, variant).price

    def product_label(self, flow: Flow, variant: Variant) -> str:
        return self._product(flow, variant).label

    def fee(self, key: str) -> int:
        return self._option(key).price

    def fee_label(self, key: str) -> str:
        return self._option(key).label

    def discount_percent(self, flow: Flow, quantity: int) -> int:
        """Percent off for `quantity` pieces of `flow`; 0 below the first tier."""
        try:
            tiers = self.discount_tiers[flow]
        except KeyError:
            raise UnknownCatalogKeyError("discount schedule", flow.value) from None

        percent = 0
        for min_qty, tier_percent in tiers:
            if quantity >= min_qty:
                percent = tier_percent
        return percent

    def shipping_for(self, merchandise_total: int) -> int:
        """Flat shipping, waived at or above the free-shipping threshold."""
        if merchandise_total >= self.free_shipping_threshold:
            return 0
        return self.shipping_flat

    def _product(self, flow: Flow, variant: Variant) -> PricedEntry:
        try:
            return self.products[(flow, variant)]
        except KeyError:
            raise UnknownCatalogKeyError("product", f"{flow.value}/{variant.value}") from None

    def _option(self, key: str) -> PricedEntry:
        try:
            return self.options[key]
        except KeyError:
            raise UnknownCatalogKeyError("option", key) from None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, source: Optional[str] = None) -> "PriceCatalog":
        """
        Check the catalog is complete and consistent.

        Args:
            source: Where the catalog came from, for the error details

        Returns:
            self, so callers can chain

        Raises:
            CatalogValidationError: listing every problem found
        """
        problems: List[str] = []

        for flow, variant in REQUIRED_PRODUCTS:
            entry = self.products.get((flow, variant))
            if entry is None:
                problems.append(f"missing product {flow.value}/{variant.value}")
            elif entry.price < 0:
                problems.append(f"negative price for product {flow.value}/{variant.value}")

        for key in REQUIRED_OPTIONS:
            entry = self.options.get(key)
            if entry is None:
                problems.append(f"missing option {key}")
            elif entry.price < 0:
                problems.append(f"negative price for option {key}")

        if self.shipping_flat < 0:
            problems.append("shipping flat rate must not be negative")
        if self.free_shipping_threshold < 0:
            problems.append("free-shipping threshold must not be negative")

        for flow in Flow:
            if flow not in self.discount_tiers:
                problems.append(f"missing discount schedule for {flow.value}")
                continue
            last_qty, last_percent = 0, 0
            for min_qty, percent in self.discount_tiers[flow]:
                if min_qty < 1 or min_qty <= last_qty:
                    problems.append(
                        f"discount tiers for {flow.value} must have ascending quantities >= 1"
                    )
                if not 0 <= percent < 100 or percent < last_percent:
                    problems.append(
                        f"discount tiers for {flow.value} must have non-decreasing percents in 0-99"
                    )
                last_qty, last_percent = min_qty, percent

        if self.default_color is ColorKey.RAINBOW:
            problems.append("default color cannot be rainbow")

        if problems:
            raise CatalogValidationError(problems, source=source)
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON catalog file format."""
        products: Dict[str, Dict[str, Any]] = {}
        for (flow, variant), entry in self.products.items():
            products.setdefault(flow.value, {})[variant.value] = {
                "label": entry.label,
                "price": entry.price,
            }

        return {
            "products": products,
            "options": {
                key: {"label": entry.label, "price": entry.price}
                for key, entry in self.options.items()
            },
            "shipping": {
                "flat": self.shipping_flat,
                "free_over": self.free_shipping_threshold,
            },
            "discounts": {
                flow.value: [list(tier) for tier in tiers]
                for flow, tiers in self.discount_tiers.items()
            },
            "default_color": self.default_color.value,
            "gift_box_variants": [variant.value for variant in self.gift_box_variants],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[str] = None) -> "PriceCatalog":
        """
        Build a catalog from the JSON file format.

        Unknown flow, variant or color names and missing or non-numeric
        prices are reported as validation problems rather than KeyErrors.
        """
        problems: List[str] = []

        products: Dict[Tuple[Flow, Variant], PricedEntry] = {}
        for flow_name, variants in data.get("products", {}).items():
            flow = _enum_or_none(Flow, flow_name)
            if flow is None:
                problems.append(f"unknown flow {flow_name!r}")
                continue
            for variant_name, entry in variants.items():
                variant = _enum_or_none(Variant, variant_name)
                if variant is None:
                    problems.append(f"unknown variant {variant_name!r}")
                    continue
                priced = _priced_entry(entry, "", f"product {flow_name}/{variant_name}", problems)
                if priced is not None:
                    products[(flow, variant)] = priced

        options: Dict[str, PricedEntry] = {}
        for key, entry in data.get("options", {}).items():
            priced = _priced_entry(entry, key, f"option {key}", problems)
            if priced is not None:
                options[key] = priced

        discount_tiers: Dict[Flow, Tuple[Tuple[int, int], ...]] = {}
        for flow_name, tiers in data.get("discounts", {}).items():
            flow = _enum_or_none(Flow, flow_name)
            if flow is None:
                problems.append(f"unknown flow {flow_name!r} in discounts")
                continue
            discount_tiers[flow] = tuple((int(q), int(p)) for q, p in tiers)

        default_color = _enum_or_none(ColorKey, data.get("default_color", "black"))
        if default_color is None:
            problems.append(f"unknown default color {data.get('default_color')!r}")
            default_color = ColorKey.BLACK

        gift_box_variants = []
        for variant_name in data.get("gift_box_variants", ["standard", "default"]):
            variant = _enum_or_none(Variant, variant_name)
            if variant is None:
                problems.append(f"unknown gift box variant {variant_name!r}")
            else:
                gift_box_variants.append(variant)

        if problems:
            raise CatalogValidationError(problems, source=source)

        shipping = data.get("shipping", {})
        return cls(
            products=products,
            options=options,
            shipping_flat=int(shipping.get("flat", 0)),
            free_shipping_threshold=int(shipping.get("free_over", 0)),
            discount_tiers=discount_tiers,
            default_color=default_color,
            gift_box_variants=tuple(gift_box_variants),
        )


def _enum_or_none(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _priced_entry(entry: Any, default_label: str, where: str, problems: List[str]) -> Optional[PricedEntry]:
    """Parse a {"label", "price"} mapping, recording a problem if the price is unusable."""
    if not isinstance(entry, dict) or "price" not in entry:
        problems.append(f"missing price for {where}")
        return None
    price = entry["price"]
    if isinstance(price, bool) or not isinstance(price, (int, float, str)):
        problems.append(f"price for {where} is not a number: {price!r}")
        return None
    try:
        return PricedEntry(entry.get("label", default_label), int(price))
    except (ValueError, OverflowError):
        problems.append(f"price for {where} is not a number: {price!r}")
        return None


DEFAULT_CATALOG = PriceCatalog(
    products={
        (Flow.ORIGINAL_SINGLE, Variant.STANDARD): PricedEntry("28mm tile", 1980),
        (Flow.ORIGINAL_SINGLE, Variant.MM30): PricedEntry("30mm tile", 2700),
        (Flow.FULLSET, Variant.STANDARD): PricedEntry("28mm tile (full set)", 206700),
        (Flow.FULLSET, Variant.MM30): PricedEntry("30mm tile (full set)", 206700),
        (Flow.REGULAR, Variant.DEFAULT): PricedEntry("28mm tile (regular)", 550),
    },
    options={
        KEYHOLDER: PricedEntry("Keyholder", 300),
        DESIGN_SUBMISSION_SINGLE: PricedEntry("Design submission fee (single)", 500),
        DESIGN_SUBMISSION_FULLSET: PricedEntry("Design submission fee (full set)", 5000),
        MULTI_COLOR: PricedEntry("Additional color", 200),
        RAINBOW: PricedEntry("Rainbow", 800),
        GIFT_BOX: PricedEntry("Paulownia gift box (4 tiles)", 1500),
        BRING_OWN_COLOR_UNIT: PricedEntry("Bring-your-own extra color", 200),
    },
    shipping_flat=390,
    free_shipping_threshold=5000,
    discount_tiers={
        Flow.ORIGINAL_SINGLE: ((5, 10), (10, 15)),
        Flow.FULLSET: ((5, 20),),
        Flow.REGULAR: (),
    },
    default_color=ColorKey.BLACK,
    gift_box_variants=(Variant.STANDARD, Variant.DEFAULT),
)


def load_catalog(path: Optional[str] = None) -> PriceCatalog:
    """
    Load and validate the price catalog.

    Args:
        path: JSON catalog file; None or empty uses DEFAULT_CATALOG

    Returns:
        Validated PriceCatalog

    Raises:
        CatalogValidationError: If the catalog is incomplete or inconsistent
        OSError: If the file cannot be read
    """
    if not path:
        logger.info("Using built-in price catalog")
        return DEFAULT_CATALOG.validate(source="built-in")

    catalog_path = Path(path)
    logger.info(f"Loading price catalog from {catalog_path}")
    with open(catalog_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    catalog = PriceCatalog.from_dict(data, source=str(catalog_path))
    catalog.validate(source=str(catalog_path))
    logger.info(
        f"Price catalog loaded: {len(catalog.products)} products, {len(catalog.options)} options"
    )
    return catalog
