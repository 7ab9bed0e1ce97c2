"""
Unit tests for request parsing and storefront selection rules.
"""

import pytest

from core.exceptions import InvalidSelectionError
from models.estimate import ColorKey, DesignType, EstimateInput, Flow, Variant
from modules.selection import parse_estimate_input, validate_selection


class TestParseEstimateInput:

    def test_full_payload(self):
        selection = parse_estimate_input({
            "flow": "original_single",
            "variant": "mm30",
            "quantity": "3",
            "design_type": "name_print",
            "use_unified_color": "false",
            "unified_color": "red",
            "char_colors": ["red", "blue", None],
            "name_text": "ABC",
            "keyholder_qty": 2,
            "gift_box_qty": "",
        })

        assert selection.flow is Flow.ORIGINAL_SINGLE
        assert selection.variant is Variant.MM30
        assert selection.quantity == 3
        assert selection.design_type is DesignType.NAME_PRINT
        assert selection.use_unified_color is False
        assert selection.char_colors == (ColorKey.RED, ColorKey.BLUE, None)
        assert selection.keyholder_qty == 2
        assert selection.gift_box_qty == 0

    def test_defaults(self):
        selection = parse_estimate_input({"flow": "regular"})
        assert selection.variant is Variant.STANDARD
        assert selection.quantity == 1
        assert selection.use_unified_color is True
        assert selection.char_colors == ()
        assert selection.name_text == ""

    def test_bad_quantities_clamped(self):
        selection = parse_estimate_input({
            "flow": "fullset", "quantity": -4, "bring_own_color_count": "x",
        })
        assert selection.quantity == 1
        assert selection.bring_own_color_count == 1

    def test_missing_flow(self):
        with pytest.raises(InvalidSelectionError) as exc_info:
            parse_estimate_input({})
        assert exc_info.value.field_name == "flow"

    def test_unknown_enum_value(self):
        with pytest.raises(InvalidSelectionError) as exc_info:
            parse_estimate_input({"flow": "regular", "unified_color": "gold"})
        assert exc_info.value.field_name == "unified_color"
        assert "rainbow" in exc_info.value.allowed

    def test_char_colors_must_be_a_list(self):
        with pytest.raises(InvalidSelectionError):
            parse_estimate_input({"flow": "regular", "char_colors": "red"})


class TestValidateSelection:

    def test_orderable(self, catalog):
        selection = EstimateInput(flow=Flow.ORIGINAL_SINGLE, quantity=4, keyholder_qty=4, gift_box_qty=1)
        assert validate_selection(selection, catalog, max_quantity=999) == []

    def test_keyholders_cannot_exceed_tiles(self, catalog):
        selection = EstimateInput(flow=Flow.ORIGINAL_SINGLE, quantity=2, keyholder_qty=3)
        errors = validate_selection(selection, catalog)
        assert len(errors) == 1
        assert "Keyholder" in errors[0]

    def test_gift_box_only_for_standard(self, catalog):
        selection = EstimateInput(flow=Flow.ORIGINAL_SINGLE, variant=Variant.MM30, gift_box_qty=1)
        assert validate_selection(selection, catalog) == [
            "The gift box is only available for 28mm tiles."
        ]

    def test_gift_box_fits_regular_tiles(self, catalog):
        selection = EstimateInput(flow=Flow.REGULAR, variant=Variant.MM30, gift_box_qty=1)
        assert validate_selection(selection, catalog) == []

    def test_max_quantity(self, catalog):
        selection = EstimateInput(flow=Flow.REGULAR, quantity=1000)
        assert validate_selection(selection, catalog, max_quantity=999)
        assert validate_selection(selection, catalog) == []
