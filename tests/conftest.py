"""Shared test fixtures for the market maker."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest

from marketmaker.config import StrategySettings
from marketmaker.models import Order, OrderBook


class RecordingObserver:
    """Observer that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def on_info(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def fields_of(self, event: str) -> dict[str, Any]:
        return next(fields for name, fields in self.events if name == event)


def order(price: str, balance: str, order_id: str = "", contract: str = "TOKEN/ETH") -> Order:
    """Build an Order from string numbers."""
    return Order(
        price=Decimal(price),
        balance=Decimal(balance),
        contract=contract,
        order_id=order_id or f"o-{price}-{balance}",
    )


@pytest.fixture
def make_order() -> Callable[..., Order]:
    return order


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def strategy_settings() -> StrategySettings:
    """Strategy settings used across decision tests.

    Quote band: weighted mid +/- 3 x 0.5.
    """
    return StrategySettings(
        pair="TOKEN/ETH",
        bot_address="0xbot",
        fund_minimum=Decimal("1"),
        token_limit=Decimal("100"),
        spread=Decimal("0.5"),
        dust_cutoff=Decimal("1"),
        band_size=Decimal("3"),
    )


@pytest.fixture
def healthy_book() -> OrderBook:
    """Book with spread 2, buy depth 170, sell depth 230, weighted mid 9.85."""
    return OrderBook(
        buys=(order("8", "10", "b2"), order("9", "10", "b1")),
        sells=(order("12", "10", "s2"), order("11", "10", "s1")),
    )
