"""
Selection parsing and caller-side validation.

The estimator prices whatever it is given. The rules a storefront enforces
before pricing (keyholders per tile, gift box sizes, order limits) live
here so the estimator stays total.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.exceptions import InvalidSelectionError
from models.estimate import ColorKey, DesignType, EstimateInput, Flow, Variant
from modules.catalog import PriceCatalog
from modules.estimator import clamp_count, resolve_variant


def _parse_enum(enum_cls, field_name: str, value: Any, default=None):
    if value is None or value == "":
        if default is None:
            raise InvalidSelectionError(field_name, value, [m.value for m in enum_cls])
        return default
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidSelectionError(field_name, value, [m.value for m in enum_cls]) from None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def parse_estimate_input(data: Dict[str, Any]) -> EstimateInput:
    """
    Build an EstimateInput from a request payload.

    Args:
        data: Decoded JSON body (or form dict)

    Returns:
        EstimateInput with counts clamped

    Raises:
        InvalidSelectionError: If flow is missing, or any enum field holds
            a value outside its choices
    """
    flow = _parse_enum(Flow, "flow", data.get("flow"))
    variant = _parse_enum(Variant, "variant", data.get("variant"), Variant.STANDARD)
    design_type = _parse_enum(
        DesignType, "design_type", data.get("design_type"), DesignType.NAME_PRINT
    )
    unified_color = _parse_enum(
        ColorKey, "unified_color", data.get("unified_color"), ColorKey.BLACK
    )

    raw_colors = data.get("char_colors") or []
    if not isinstance(raw_colors, (list, tuple)):
        raise InvalidSelectionError("char_colors", raw_colors, [m.value for m in ColorKey])
    # Unset slots stay None; the estimator fills them with the catalog default
    char_colors = tuple(
        None if value is None or value == "" else _parse_enum(ColorKey, "char_colors", value)
        for value in raw_colors
    )

    name_text = data.get("name_text") or ""
    if not isinstance(name_text, str):
        name_text = str(name_text)

    return EstimateInput(
        flow=flow,
        variant=variant,
        quantity=clamp_count(data.get("quantity"), 1),
        design_type=design_type,
        use_unified_color=_parse_bool(data.get("use_unified_color", True)),
        unified_color=unified_color,
        char_colors=char_colors,
        name_text=name_text,
        bring_own_color_count=clamp_count(data.get("bring_own_color_count"), 1),
        keyholder_qty=clamp_count(data.get("keyholder_qty"), 0),
        gift_box_qty=clamp_count(data.get("gift_box_qty"), 0),
    )


def validate_selection(
    selection: EstimateInput,
    catalog: PriceCatalog,
    max_quantity: Optional[int] = None,
) -> List[str]:
    """
    Storefront rules for adding a selection to the cart.

    Returns:
        List of user-facing messages; empty when the selection is orderable
    """
    errors: List[str] = []

    if max_quantity is not None and selection.quantity > max_quantity:
        errors.append(f"Quantity too large. Maximum is {max_quantity} per item.")

    if selection.keyholder_qty > selection.quantity:
        errors.append(
            f"Keyholder quantity ({selection.keyholder_qty}) cannot exceed "
            f"tile quantity ({selection.quantity})."
        )

    variant = resolve_variant(selection.flow, selection.variant)
    if selection.gift_box_qty > 0 and variant not in catalog.gift_box_variants:
        errors.append("The gift box is only available for 28mm tiles.")

    return errors
