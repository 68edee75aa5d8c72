"""Market snapshot derived from a raw order book.

Computes best prices, spread, per-side depth and the depth-weighted
mid-market price. Recomputed every decision cycle; never cached.

Core formulas:
  spread = best_sell_price - best_buy_price
  depth(side) = sum(balance * price) over the side's orders
  weighted_mid = (best_sell * buy_depth + best_buy * sell_depth)
                 / (buy_depth + sell_depth)

CRITICAL: All values use Decimal. Never use float for prices or depth.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from marketmaker.exceptions import QuoteComputationError
from marketmaker.models import Order, OrderBook

_ZERO = Decimal("0")


def side_depth(orders: Iterable[Order]) -> Decimal:
    """Total notional (balance x price) of one side of the book."""
    return sum((order.notional for order in orders), _ZERO)


def best_buy_order(orders: Iterable[Order]) -> Order:
    """The highest-priced buy order.

    Raises:
        QuoteComputationError: If there are no buy orders.
    """
    orders = list(orders)
    if not orders:
        raise QuoteComputationError("Best buy price is undefined: no buy orders")
    return max(orders, key=lambda o: o.price)


def best_sell_order(orders: Iterable[Order]) -> Order:
    """The lowest-priced sell order.

    Raises:
        QuoteComputationError: If there are no sell orders.
    """
    orders = list(orders)
    if not orders:
        raise QuoteComputationError("Best sell price is undefined: no sell orders")
    return min(orders, key=lambda o: o.price)


def weighted_mid_price(
    best_buy_price: Decimal,
    best_sell_price: Decimal,
    buy_depth: Decimal,
    sell_depth: Decimal,
) -> Decimal:
    """Depth-weighted mid price, biased toward the thinner side.

    Raises:
        QuoteComputationError: If the book has no depth at all.
    """
    total_depth = buy_depth + sell_depth
    if total_depth == _ZERO:
        raise QuoteComputationError("Weighted mid price is undefined: book has no depth")
    return (best_sell_price * buy_depth + best_buy_price * sell_depth) / total_depth


@dataclass(frozen=True)
class MarketSnapshot:
    """Derived market state for one cycle."""

    book: OrderBook
    best_buy: Order
    best_sell: Order
    buy_depth: Decimal
    sell_depth: Decimal
    weighted_mid_price: Decimal

    @property
    def best_buy_price(self) -> Decimal:
        return self.best_buy.price

    @property
    def best_sell_price(self) -> Decimal:
        return self.best_sell.price

    @property
    def spread(self) -> Decimal:
        """Best sell minus best buy; <= 0 means the book is crossed."""
        return self.best_sell.price - self.best_buy.price

    @property
    def is_crossed(self) -> bool:
        return self.spread <= _ZERO

    @classmethod
    def from_order_book(cls, book: OrderBook) -> "MarketSnapshot":
        """Compute the snapshot for a book with at least one order per side.

        Raises:
            QuoteComputationError: If either side is empty or the book has
                no depth.
        """
        best_buy = best_buy_order(book.buys)
        best_sell = best_sell_order(book.sells)
        buy_depth = side_depth(book.buys)
        sell_depth = side_depth(book.sells)
        return cls(
            book=book,
            best_buy=best_buy,
            best_sell=best_sell,
            buy_depth=buy_depth,
            sell_depth=sell_depth,
            weighted_mid_price=weighted_mid_price(
                best_buy.price, best_sell.price, buy_depth, sell_depth
            ),
        )
