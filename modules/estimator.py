"""Line estimator: turns one line item's selections into a priced Estimate."""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence, Tuple

from logging_config import get_logger
from models.estimate import (
    ColorKey,
    DesignType,
    Estimate,
    EstimateInput,
    ExtraRow,
    Flow,
    Variant,
)
from modules import catalog as keys
from modules.catalog import PriceCatalog


# Names longer than this are laid out on two lines
MAX_CHARS_PER_LINE = 4


def clamp_count(value: Any, minimum: int) -> int:
    """Coerce a raw count to an int >= minimum.

    Integers are kept exact. None, non-numeric strings, NaN and infinities
    all become `minimum`. Fractions are floored.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return max(value, minimum)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return minimum
    if not math.isfinite(number) or number < minimum:
        return minimum
    return int(math.floor(number))


def discount_rate_for(flow: Flow, quantity: int, catalog: PriceCatalog) -> float:
    """Discount rate for `quantity` pieces of `flow` (0.1 for 10%)."""
    return catalog.discount_percent(flow, quantity) / 100


def resolve_variant(flow: Flow, variant: Variant) -> Variant:
    """Regular tiles only come in `default`; `default` means `standard` elsewhere."""
    if flow is Flow.REGULAR:
        return Variant.DEFAULT
    if variant is Variant.DEFAULT:
        return Variant.STANDARD
    return variant


def used_colors(
    name_text: str,
    char_colors: Sequence[Optional[ColorKey]],
    default: ColorKey,
) -> List[ColorKey]:
    """Colors of the characters actually printed.

    Unset slots (None) and slots past the end of `char_colors` take
    `default`. An empty name still yields one slot so there is always a
    color.
    """
    needed = max(1, len(name_text))
    colors = [default if color is None else color for color in char_colors[:needed]]
    colors.extend([default] * (needed - len(colors)))
    return colors


def line_colors(
    name_text: str,
    char_colors: Sequence[Optional[ColorKey]],
    default: ColorKey,
) -> List[List[Tuple[str, ColorKey]]]:
    """Split a name into display lines paired with each character's color.

    Names over four characters break into two lines, the first holding the
    larger half. Colors for the second line continue from the same flat
    list.
    """
    chars = list(name_text)
    colors = used_colors(name_text, char_colors, default)
    if len(chars) <= MAX_CHARS_PER_LINE:
        return [list(zip(chars, colors))]

    half = math.ceil(len(chars) / 2)
    return [
        list(zip(chars[:half], colors[:half])),
        list(zip(chars[half:], colors[half:])),
    ]


class LineEstimator:
    """Prices one line item against a PriceCatalog.

    compute_estimate() is total: every EstimateInput yields an Estimate.
    Bad counts are clamped, never rejected.
    """

    def __init__(self, catalog: PriceCatalog) -> None:
        self.catalog = catalog
        self.logger = get_logger(__name__)

    def compute_estimate(self, selection: EstimateInput) -> Estimate:
        catalog = self.catalog

        quantity = clamp_count(selection.quantity, 1)
        variant = resolve_variant(selection.flow, selection.variant)
        unit = catalog.unit_price(selection.flow, variant)

        self.logger.debug(
            f"Estimating {selection.flow.value}/{variant.value} x{quantity}, "
            f"design={selection.design_type.value}"
        )

        design_rows = self._design_rows(selection)
        option_rows = self._option_rows(selection)
        extras = tuple(design_rows + option_rows)

        per_piece = sum(row.amount for row in design_rows)
        option_total = per_piece * quantity + sum(row.amount for row in option_rows)

        pre_discount = unit * quantity + option_total
        percent = catalog.discount_percent(selection.flow, quantity)
        # Integer percent keeps the floor exact
        discount_amount = pre_discount * percent // 100
        merchandise_subtotal = pre_discount - discount_amount
        shipping = catalog.shipping_for(merchandise_subtotal)

        estimate = Estimate(
            unit=unit,
            quantity=quantity,
            extras=extras,
            option_total=option_total,
            discount_rate=percent / 100,
            discount_amount=discount_amount,
            pre_discount=pre_discount,
            merchandise_subtotal=merchandise_subtotal,
            shipping=shipping,
            total=merchandise_subtotal + shipping,
            requires_quote=selection.design_type is DesignType.COMMISSION,
        )
        self.logger.debug(f"Estimate: {estimate.to_dict()}")
        return estimate

    # ------------------------------------------------------------------
    # Design surcharge
    # ------------------------------------------------------------------

    def _design_rows(self, selection: EstimateInput) -> List[ExtraRow]:
        """Per-piece design fees, in display order."""
        flow = selection.flow
        if flow is Flow.REGULAR:
            return []

        if selection.design_type is DesignType.NAME_PRINT:
            if flow is not Flow.ORIGINAL_SINGLE:
                return []
            return self._color_rows(selection)

        if selection.design_type is DesignType.BRING_OWN:
            return self._bring_own_rows(selection)

        # Commission: quoted manually downstream
        return []

    def _color_rows(self, selection: EstimateInput) -> List[ExtraRow]:
        fee = self.color_surcharge(selection)
        if fee == 0:
            return []

        catalog = self.catalog
        if self._uses_rainbow(selection):
            return [ExtraRow(catalog.fee_label(keys.RAINBOW), fee)]

        steps = self._distinct_color_count(selection) - 1
        label = f"{catalog.fee_label(keys.MULTI_COLOR)} (+{steps})"
        if steps * catalog.fee(keys.MULTI_COLOR) > fee:
            label += " (capped)"
        return [ExtraRow(label, fee)]

    def color_surcharge(self, selection: EstimateInput) -> int:
        """Per-piece color fee for a printed name.

        One color is free and each further distinct color adds one step,
        never more than the rainbow fee. Any rainbow character costs the
        rainbow fee.
        """
        if selection.flow is not Flow.ORIGINAL_SINGLE:
            return 0
        if selection.design_type is not DesignType.NAME_PRINT:
            return 0

        rainbow_fee = self.catalog.fee(keys.RAINBOW)
        if self._uses_rainbow(selection):
            return rainbow_fee
        if selection.use_unified_color:
            return 0

        steps = self._distinct_color_count(selection) - 1
        return min(steps * self.catalog.fee(keys.MULTI_COLOR), rainbow_fee)

    def _uses_rainbow(self, selection: EstimateInput) -> bool:
        if selection.use_unified_color:
            return selection.unified_color is ColorKey.RAINBOW
        return ColorKey.RAINBOW in self._printed_colors(selection)

    def _distinct_color_count(self, selection: EstimateInput) -> int:
        return len(set(self._printed_colors(selection)))

    def _printed_colors(self, selection: EstimateInput) -> List[ColorKey]:
        return used_colors(selection.name_text, selection.char_colors, self.catalog.default_color)

    def _bring_own_rows(self, selection: EstimateInput) -> List[ExtraRow]:
        catalog = self.catalog
        submission_key = (
            keys.DESIGN_SUBMISSION_FULLSET
            if selection.flow is Flow.FULLSET
            else keys.DESIGN_SUBMISSION_SINGLE
        )
        rows = [ExtraRow(catalog.fee_label(submission_key), catalog.fee(submission_key))]

        extra_colors = clamp_count(selection.bring_own_color_count, 1) - 1
        if extra_colors > 0:
            rows.append(
                ExtraRow(
                    f"{catalog.fee_label(keys.BRING_OWN_COLOR_UNIT)} (+{extra_colors} colors)",
                    catalog.fee(keys.BRING_OWN_COLOR_UNIT) * extra_colors,
                )
            )
        return rows

    # ------------------------------------------------------------------
    # Physical options
    # ------------------------------------------------------------------

    def _option_rows(self, selection: EstimateInput) -> List[ExtraRow]:
        """Keyholder and gift box rows, each already multiplied by its own count."""
        rows = []
        for key, count in (
            (keys.KEYHOLDER, selection.keyholder_qty),
            (keys.GIFT_BOX, selection.gift_box_qty),
        ):
            count = clamp_count(count, 0)
            if count > 0:
                rows.append(
                    ExtraRow(
                        f"{self.catalog.fee_label(key)} x{count}",
                        self.catalog.fee(key) * count,
                        per_piece=False,
                    )
                )
        return rows
