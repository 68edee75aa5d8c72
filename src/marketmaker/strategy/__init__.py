"""Market making strategy: the decision engine and its per-cycle driver."""

from marketmaker.strategy.engine import (
    HEALTHY_BOOK_MINIMUM,
    compute_next_actions,
    ensure_healthy_book,
)
from marketmaker.strategy.market_maker import MarketMaker
from marketmaker.strategy.observer import DecisionObserver, LoggingObserver, NullObserver

__all__ = [
    "HEALTHY_BOOK_MINIMUM",
    "DecisionObserver",
    "LoggingObserver",
    "MarketMaker",
    "NullObserver",
    "compute_next_actions",
    "ensure_healthy_book",
]
