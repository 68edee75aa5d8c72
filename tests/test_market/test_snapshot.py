"""Tests for MarketSnapshot and order book accessors.

Verifies:
- Best prices regardless of input ordering
- Spread, per-side notional depth and weighted mid price formulas
- Exact decimal depth over many small orders
- QuoteComputationError on empty sides or zero depth
"""

from decimal import Decimal

import pytest

from marketmaker.exceptions import QuoteComputationError, ThinBookError
from marketmaker.market.snapshot import (
    MarketSnapshot,
    best_buy_order,
    best_sell_order,
    side_depth,
    weighted_mid_price,
)
from marketmaker.models import OrderBook


class TestAccessors:
    """Tests for the per-side helpers."""

    def test_best_buy_is_highest_price(self, make_order) -> None:
        """Best buy is the highest bid, whatever the input order."""
        orders = [make_order("8", "1"), make_order("9.5", "1"), make_order("9", "1")]
        assert best_buy_order(orders).price == Decimal("9.5")

    def test_best_sell_is_lowest_price(self, make_order) -> None:
        """Best sell is the lowest ask, whatever the input order."""
        orders = [make_order("12", "1"), make_order("10.5", "1"), make_order("11", "1")]
        assert best_sell_order(orders).price == Decimal("10.5")

    def test_empty_side_has_no_best_price(self) -> None:
        """An empty side raises QuoteComputationError, a ThinBookError."""
        with pytest.raises(QuoteComputationError):
            best_buy_order([])
        with pytest.raises(ThinBookError):
            best_sell_order([])

    def test_depth_is_notional_sum(self, make_order) -> None:
        """Depth sums balance x price."""
        orders = [make_order("2", "3"), make_order("0.5", "4")]
        assert side_depth(orders) == Decimal("8")

    def test_depth_of_empty_side_is_zero(self) -> None:
        assert side_depth([]) == Decimal("0")

    def test_depth_is_exact_over_many_small_orders(self, make_order) -> None:
        """A thousand 0.1 x 0.1 orders sum to exactly 10."""
        orders = [make_order("0.1", "0.1", f"o{i}") for i in range(1000)]
        assert side_depth(orders) == Decimal("10")

    def test_weighted_mid_biased_toward_thinner_side(self) -> None:
        """Heavier sell depth pulls the mid toward the best buy."""
        mid = weighted_mid_price(
            best_buy_price=Decimal("9"),
            best_sell_price=Decimal("11"),
            buy_depth=Decimal("100"),
            sell_depth=Decimal("300"),
        )
        # (11 * 100 + 9 * 300) / 400
        assert mid == Decimal("9.5")

    def test_weighted_mid_undefined_without_depth(self) -> None:
        with pytest.raises(QuoteComputationError):
            weighted_mid_price(Decimal("9"), Decimal("11"), Decimal("0"), Decimal("0"))


class TestMarketSnapshot:
    """Tests for MarketSnapshot.from_order_book."""

    def test_healthy_book(self, healthy_book: OrderBook) -> None:
        """All derived values follow the snapshot formulas."""
        snapshot = MarketSnapshot.from_order_book(healthy_book)
        assert snapshot.best_buy_price == Decimal("9")
        assert snapshot.best_sell_price == Decimal("11")
        assert snapshot.spread == Decimal("2")
        assert snapshot.buy_depth == Decimal("170")
        assert snapshot.sell_depth == Decimal("230")
        # (11 * 170 + 9 * 230) / 400
        assert snapshot.weighted_mid_price == Decimal("9.85")
        assert snapshot.is_crossed is False

    def test_best_orders_keep_identifiers(self, healthy_book: OrderBook) -> None:
        """The best orders carry the ids needed to trade against them."""
        snapshot = MarketSnapshot.from_order_book(healthy_book)
        assert snapshot.best_buy.order_id == "b1"
        assert snapshot.best_sell.order_id == "s1"

    def test_crossed_book(self, make_order) -> None:
        """A best buy at or above the best sell is a crossed book."""
        book = OrderBook(
            buys=(make_order("11", "1"), make_order("8", "1")),
            sells=(make_order("10", "1"), make_order("12", "1")),
        )
        snapshot = MarketSnapshot.from_order_book(book)
        assert snapshot.spread == Decimal("-1")
        assert snapshot.is_crossed is True

    def test_empty_side_fails(self, make_order) -> None:
        book = OrderBook(buys=(make_order("9", "1"),), sells=())
        with pytest.raises(QuoteComputationError):
            MarketSnapshot.from_order_book(book)

    def test_zero_depth_fails(self, make_order) -> None:
        """Orders with zero balance leave the mid price undefined."""
        book = OrderBook(buys=(make_order("9", "0"),), sells=(make_order("11", "0"),))
        with pytest.raises(QuoteComputationError):
            MarketSnapshot.from_order_book(book)
