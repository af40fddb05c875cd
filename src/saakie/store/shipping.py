"""Shipping charges for the cart summary."""

from decimal import Decimal
from typing import NamedTuple

from .conf import get_setting


class ShippingSummary(NamedTuple):
    """Order totals shown beside the cart."""

    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    free_shipping: bool
    amount_to_free_shipping: Decimal


def summarize(subtotal) -> ShippingSummary:
    """Apply the flat shipping charge unless the subtotal reaches the free threshold.

    An empty cart ships nothing and is charged nothing.
    """
    subtotal = Decimal(str(subtotal))
    threshold = Decimal(str(get_setting("FREE_SHIPPING_THRESHOLD")))
    charge = Decimal(str(get_setting("SHIPPING_CHARGE")))

    free_shipping = subtotal >= threshold
    if free_shipping or subtotal <= 0:
        shipping = Decimal("0")
    else:
        shipping = charge

    return ShippingSummary(
        subtotal=subtotal,
        shipping=shipping,
        total=subtotal + shipping,
        free_shipping=free_shipping,
        amount_to_free_shipping=max(threshold - subtotal, Decimal("0")),
    )
