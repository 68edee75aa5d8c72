"""Outlier filtering for the depth chart.

A single far-priced order with a large balance compresses the whole chart.
The filter caps the plotted notional of one side at 1.5x the opposite
side's depth. It only changes what is plotted, never the real book.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from decimal import Decimal

from marketmaker.models import Order

_CAP_MULTIPLIER = Decimal("1.5")
_ALWAYS_KEPT = 2  # minimum viable chart width


@dataclass(frozen=True)
class FilteredSide:
    """Orders left to plot for one side, and whether the side was cut short."""

    orders: tuple[Order, ...]
    truncated: bool = False


def filter_outliers(orders: Sequence[Order], opposite_depth: Decimal) -> FilteredSide:
    """Bound a side's plotted range against the opposite side's depth.

    The first two orders are always kept. From the third order onward the
    running notional is accumulated; orders are kept while it stays within
    the cap U = 1.5 x opposite_depth. The first order that crosses U is kept
    with its plotted balance rewritten to U / price, and everything after it
    is dropped.

    Args:
        orders: The side's orders, in the order they should be consumed.
        opposite_depth: Total notional of the other plotted side.

    Returns:
        FilteredSide with the plotted orders and the truncation flag.
    """
    upper_limit = opposite_depth * _CAP_MULTIPLIER
    kept = list(orders[:_ALWAYS_KEPT])
    cumulative = Decimal("0")

    for order in orders[_ALWAYS_KEPT:]:
        cumulative += order.notional
        if cumulative <= upper_limit:
            kept.append(order)
            continue
        kept.append(replace(order, balance=upper_limit / order.price))
        return FilteredSide(orders=tuple(kept), truncated=True)

    return FilteredSide(orders=tuple(kept), truncated=False)
