"""
Unit tests for the price catalog.

Covers lookups, fail-fast validation and loading from a JSON file.
"""

import dataclasses
import json

import pytest

from core.exceptions import CatalogValidationError, UnknownCatalogKeyError
from models.estimate import Flow, Variant
from modules.catalog import DEFAULT_CATALOG, PriceCatalog, load_catalog


class TestLookups:

    def test_unit_prices(self, catalog):
        assert catalog.unit_price(Flow.ORIGINAL_SINGLE, Variant.STANDARD) == 1980
        assert catalog.unit_price(Flow.ORIGINAL_SINGLE, Variant.MM30) == 2700
        assert catalog.unit_price(Flow.FULLSET, Variant.MM30) == 206700
        assert catalog.unit_price(Flow.REGULAR, Variant.DEFAULT) == 550

    def test_option_fees(self, catalog):
        assert catalog.fee("keyholder") == 300
        assert catalog.fee("rainbow") == 800
        assert catalog.fee("gift_box") == 1500
        assert catalog.fee_label("keyholder") == "Keyholder"

    def test_unknown_product_fails_loudly(self, catalog):
        with pytest.raises(UnknownCatalogKeyError) as exc_info:
            catalog.unit_price(Flow.REGULAR, Variant.MM30)
        assert exc_info.value.kind == "product"

    def test_unknown_option_fails_loudly(self, catalog):
        with pytest.raises(UnknownCatalogKeyError):
            catalog.fee("engraving")

    def test_shipping_threshold_inclusive(self, catalog):
        assert catalog.shipping_for(4999) == 390
        assert catalog.shipping_for(5000) == 0
        assert catalog.shipping_for(12000) == 0

    def test_discount_percent_highest_tier_only(self, catalog):
        assert catalog.discount_percent(Flow.ORIGINAL_SINGLE, 4) == 0
        assert catalog.discount_percent(Flow.ORIGINAL_SINGLE, 5) == 10
        assert catalog.discount_percent(Flow.ORIGINAL_SINGLE, 10) == 15
        assert catalog.discount_percent(Flow.FULLSET, 5) == 20
        assert catalog.discount_percent(Flow.REGULAR, 100) == 0


class TestValidation:

    def test_default_catalog_is_valid(self):
        assert DEFAULT_CATALOG.validate() is DEFAULT_CATALOG

    def test_missing_entries_all_reported(self):
        products = dict(DEFAULT_CATALOG.products)
        del products[(Flow.FULLSET, Variant.MM30)]
        options = dict(DEFAULT_CATALOG.options)
        del options["rainbow"]
        broken = dataclasses.replace(DEFAULT_CATALOG, products=products, options=options)

        with pytest.raises(CatalogValidationError) as exc_info:
            broken.validate(source="test")

        problems = exc_info.value.problems
        assert "missing product fullset/mm30" in problems
        assert "missing option rainbow" in problems
        assert exc_info.value.details["source"] == "test"

    def test_missing_discount_schedule(self):
        tiers = dict(DEFAULT_CATALOG.discount_tiers)
        del tiers[Flow.REGULAR]
        broken = dataclasses.replace(DEFAULT_CATALOG, discount_tiers=tiers)

        with pytest.raises(CatalogValidationError):
            broken.validate()
        with pytest.raises(UnknownCatalogKeyError):
            broken.discount_percent(Flow.REGULAR, 1)

    def test_decreasing_tiers_rejected(self):
        tiers = dict(DEFAULT_CATALOG.discount_tiers)
        tiers[Flow.ORIGINAL_SINGLE] = ((5, 15), (10, 10))
        broken = dataclasses.replace(DEFAULT_CATALOG, discount_tiers=tiers)

        with pytest.raises(CatalogValidationError):
            broken.validate()

    def test_negative_shipping_rejected(self):
        with pytest.raises(CatalogValidationError):
            dataclasses.replace(DEFAULT_CATALOG, shipping_flat=-1).validate()


class TestLoadCatalog:

    def test_no_path_uses_builtin(self):
        assert load_catalog(None) is DEFAULT_CATALOG
        assert load_catalog("") is DEFAULT_CATALOG

    def test_load_from_json_file(self, tmp_path):
        data = DEFAULT_CATALOG.to_dict()
        data["shipping"]["flat"] = 500
        data["products"]["regular"]["default"]["price"] = 600
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        loaded = load_catalog(str(path))

        assert loaded.shipping_flat == 500
        assert loaded.unit_price(Flow.REGULAR, Variant.DEFAULT) == 600
        assert loaded.unit_price(Flow.ORIGINAL_SINGLE, Variant.STANDARD) == 1980

    def test_file_format_matches_builtin(self):
        assert PriceCatalog.from_dict(DEFAULT_CATALOG.to_dict()) == DEFAULT_CATALOG

    def test_incomplete_file_rejected(self, tmp_path):
        data = DEFAULT_CATALOG.to_dict()
        del data["options"]["keyholder"]
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(CatalogValidationError) as exc_info:
            load_catalog(str(path))
        assert "missing option keyholder" in exc_info.value.problems

    def test_unknown_flow_rejected(self, tmp_path):
        data = DEFAULT_CATALOG.to_dict()
        data["products"]["mahjong_deluxe"] = {"standard": {"label": "x", "price": 1}}
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(CatalogValidationError):
            load_catalog(str(path))

    def test_missing_price_reported(self):
        data = DEFAULT_CATALOG.to_dict()
        del data["options"]["rainbow"]["price"]

        with pytest.raises(CatalogValidationError) as exc_info:
            PriceCatalog.from_dict(data)
        assert "missing price for option rainbow" in exc_info.value.problems

    def test_non_numeric_price_reported(self):
        data = DEFAULT_CATALOG.to_dict()
        data["products"]["regular"]["default"]["price"] = "cheap"
        data["options"]["keyholder"]["price"] = None

        with pytest.raises(CatalogValidationError) as exc_info:
            PriceCatalog.from_dict(data)
        assert len(exc_info.value.problems) == 2
