"""Market state derived from order books."""

from marketmaker.market.snapshot import (
    MarketSnapshot,
    best_buy_order,
    best_sell_order,
    side_depth,
    weighted_mid_price,
)

__all__ = [
    "MarketSnapshot",
    "best_buy_order",
    "best_sell_order",
    "side_depth",
    "weighted_mid_price",
]
