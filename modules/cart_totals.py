"""Cart aggregation.

Cart shipping is decided here, on the summed post-discount merchandise
total. A line's own Estimate.shipping is only a preview: two lines that
each pay shipping alone can ship free together.
"""

from __future__ import annotations

from typing import Iterable

from models.cart import CartItem, CartTotals
from modules.catalog import PriceCatalog


def compute_cart_totals(items: Iterable[CartItem], catalog: PriceCatalog) -> CartTotals:
    """Totals for the cart.

    Each item's discount is the amount frozen when it was added; it is
    not recomputed from current prices.
    """
    pre_merchandise = 0
    discount = 0
    count = 0
    for item in items:
        pre_merchandise += item.pre_discount
        discount += item.discount
        count += 1

    after_discount = pre_merchandise - discount
    shipping = catalog.shipping_for(after_discount) if count else 0
    return CartTotals(
        pre_merchandise=pre_merchandise,
        discount=discount,
        after_discount=after_discount,
        shipping=shipping,
        total=after_discount + shipping,
        item_count=count,
    )
