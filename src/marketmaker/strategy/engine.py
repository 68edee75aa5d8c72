"""Decision engine for single-pair market making.

Given a market snapshot, the bot's own resting orders and its wallet
balances, decides the next market action. Checkpoints run in strict
priority order and the first one producing actions wins:

  1. GUARD: book must hold at least 2 orders per side (ThinBookError)
  2. ARBITRAGE: crossed book -> two Trade actions against the best orders
  3. CLEANUP: cancel own dust orders and orders outside the price band
  4. QUOTE: post a new buy and/or sell around the weighted mid price

An empty result is the normal steady state, not an error.

The engine is synchronous and pure: no I/O, no state between calls.
Informational events go to the injected DecisionObserver.

CRITICAL: All computations use Decimal. Never use float for prices or amounts.
"""

from collections.abc import Sequence
from decimal import Decimal

from marketmaker.charts.depth import render_depth_chart
from marketmaker.config import StrategySettings
from marketmaker.exceptions import ThinBookError
from marketmaker.exchange.types import round_down, round_price
from marketmaker.market.snapshot import MarketSnapshot
from marketmaker.models import (
    Action,
    CancelOrder,
    NewOrder,
    Order,
    OrderBook,
    OrderSide,
    Trade,
    WalletBalances,
)
from marketmaker.strategy.observer import DecisionObserver, NullObserver

HEALTHY_BOOK_MINIMUM = 2

_ZERO = Decimal("0")
_TWO = Decimal("2")


def _pluralized_orders(count: int) -> str:
    return f"{count} order" if count == 1 else f"{count} orders"


def ensure_healthy_book(book: OrderBook, pair: str) -> None:
    """Fail the cycle when either side has fewer than 2 orders.

    Raises:
        ThinBookError: With an operator-facing message.
    """
    if len(book.buys) < HEALTHY_BOOK_MINIMUM or len(book.sells) < HEALTHY_BOOK_MINIMUM:
        raise ThinBookError(
            f"The order book for {pair} is too thin for this bot to properly work "
            f"({len(book.buys)} buys, {len(book.sells)} sells). Consider manually "
            f"creating orders first. The bot needs at least {HEALTHY_BOOK_MINIMUM} "
            f"buy and sell orders."
        )


def available_quote(settings: StrategySettings, quote_balance: Decimal) -> Decimal:
    """Quote funds that may be deployed: balance above the reserve, never negative."""
    return max(_ZERO, quote_balance - settings.fund_minimum)


def available_base(settings: StrategySettings, base_balance: Decimal) -> Decimal:
    """Base tokens that may be deployed, capped at the configured token limit."""
    return min(base_balance, settings.token_limit)


def report_market_health(snapshot: MarketSnapshot, observer: DecisionObserver) -> None:
    """Emit the market summary and the depth chart."""
    observer.on_info(
        "market_health",
        best_buy_price=str(snapshot.best_buy_price),
        best_sell_price=str(snapshot.best_sell_price),
        spread=str(snapshot.spread),
        weighted_mid_price=str(snapshot.weighted_mid_price),
        buy_depth=str(snapshot.buy_depth),
        sell_depth=str(snapshot.sell_depth),
    )
    observer.on_info(
        "order_book_chart",
        chart=render_depth_chart(snapshot.book.buys, snapshot.book.sells),
    )


# ---------------------------------------------------------------------------
# Arbitrage
# ---------------------------------------------------------------------------


def check_arbitrage(
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    balances: WalletBalances,
    observer: DecisionObserver,
) -> list[Action]:
    """Take both sides of a crossed book.

    Trade amount = min(best buy balance, best sell balance, available tokens).
    Emits the buy leg (against the best sell) first, then the sell leg
    (against the best buy). No actions when the bot holds no tokens.
    """
    spread = snapshot.spread
    if spread > _ZERO:
        return []

    best_buy = snapshot.best_buy
    best_sell = snapshot.best_sell
    observer.on_info("arbitrage_detected", spread=str(spread))

    tokens = available_base(settings, balances.base)
    if tokens <= _ZERO:
        amount = min(best_buy.balance, best_sell.balance)
        observer.on_info(
            "arbitrage_insufficient_tokens",
            amount=str(amount),
            buy_price=str(best_sell.price),
            sell_price=str(best_buy.price),
            potential_profit=str(amount * -spread),
            note=f"Send more {settings.base_token} to {settings.bot_address}",
        )
        return []

    amount = min(best_buy.balance, best_sell.balance, tokens)
    observer.on_info(
        "arbitrage_planned",
        amount=str(amount),
        buy_price=str(best_sell.price),
        sell_price=str(best_buy.price),
        potential_profit=str(amount * -spread),
    )
    return [
        Trade(
            contract=best_sell.contract,
            order_id=best_sell.order_id,
            amount=amount,
            side=OrderSide.BUY,
            price=best_sell.price,
        ),
        Trade(
            contract=best_buy.contract,
            order_id=best_buy.order_id,
            amount=amount,
            side=OrderSide.SELL,
            price=best_buy.price,
        ),
    ]


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------


def band_cutoff(
    settings: StrategySettings, snapshot: MarketSnapshot, side: OrderSide
) -> Decimal:
    """Price bound of the acceptable band for own orders on a side."""
    width = settings.band_size * settings.spread
    if side == OrderSide.SELL:
        return snapshot.weighted_mid_price + width
    return snapshot.weighted_mid_price - width


def prune_orders(
    orders: Sequence[Order],
    side: OrderSide,
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    observer: DecisionObserver,
) -> list[Order]:
    """Select own orders on one side that should be cancelled.

    Dust (notional <= dust_cutoff) is checked first. Of the remaining
    orders, sells priced above the band and buys priced below it are band
    outliers. The two sets are disjoint.

    Returns:
        Dust orders followed by band outliers.
    """
    dust = [o for o in orders if o.notional <= settings.dust_cutoff]
    cutoff = band_cutoff(settings, snapshot, side)
    if side == OrderSide.SELL:
        outsiders = [o for o in orders if o not in dust and o.price > cutoff]
    else:
        outsiders = [o for o in orders if o not in dust and o.price < cutoff]

    if outsiders:
        observer.on_info(
            "cancel_outside_band",
            side=side.value,
            orders=_pluralized_orders(len(outsiders)),
            cutoff=str(cutoff),
        )
    if dust:
        observer.on_info(
            "cancel_dust",
            side=side.value,
            orders=_pluralized_orders(len(dust)),
            dust_cutoff=str(settings.dust_cutoff),
        )
    return dust + outsiders


def cleanup_orders(
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    own_orders: OrderBook,
    observer: DecisionObserver,
) -> list[Action]:
    """Cancel own sells, then own buys, that are dust or outside the band."""
    to_cancel = prune_orders(
        own_orders.sells, OrderSide.SELL, settings, snapshot, observer
    ) + prune_orders(own_orders.buys, OrderSide.BUY, settings, snapshot, observer)
    return [CancelOrder(contract=o.contract, order_id=o.order_id) for o in to_cancel]


# ---------------------------------------------------------------------------
# New quotes
# ---------------------------------------------------------------------------


def new_buy(
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    own_orders: OrderBook,
    balances: WalletBalances,
    observer: DecisionObserver,
) -> list[Action]:
    """Quote a buy below mid if it would become the best bid."""
    funds = available_quote(settings, balances.quote)
    if funds <= settings.dust_cutoff:
        if not own_orders.buys:
            observer.on_info(
                "insufficient_quote_funds",
                available=str(funds),
                note=f"Send more {settings.quote_token} to {settings.bot_address}",
            )
        return []

    price = round_price(
        snapshot.weighted_mid_price - settings.spread / _TWO, settings.price_decimals
    )
    if price <= snapshot.best_buy_price:
        return []

    amount = round_down(funds / price, balances.token_decimals)
    if amount <= _ZERO:
        return []
    return [NewOrder(side=OrderSide.BUY, amount=amount, price=price)]


def new_sell(
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    own_orders: OrderBook,
    balances: WalletBalances,
    observer: DecisionObserver,
) -> list[Action]:
    """Quote a sell above mid if it would become the best ask."""
    locked = sum((o.balance for o in own_orders.sells), _ZERO)
    tokens = available_base(settings, balances.base) - locked
    if tokens <= _ZERO:
        if not own_orders.sells:
            observer.on_info(
                "insufficient_base_tokens",
                available=str(tokens),
                note=f"Send more {settings.base_token} to {settings.bot_address}",
            )
        return []

    price = round_price(
        snapshot.weighted_mid_price + settings.spread / _TWO, settings.price_decimals
    )
    if price >= snapshot.best_sell_price:
        return []

    amount = round_down(tokens, balances.token_decimals)
    if amount <= _ZERO:
        return []
    return [NewOrder(side=OrderSide.SELL, amount=amount, price=price)]


def new_orders(
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    own_orders: OrderBook,
    balances: WalletBalances,
    observer: DecisionObserver,
) -> list[Action]:
    """Post new quotes when the market spread leaves room for them."""
    if snapshot.spread <= settings.spread:
        return []
    return new_buy(settings, snapshot, own_orders, balances, observer) + new_sell(
        settings, snapshot, own_orders, balances, observer
    )


def compute_next_actions(
    settings: StrategySettings,
    snapshot: MarketSnapshot,
    own_orders: OrderBook,
    balances: WalletBalances,
    observer: DecisionObserver | None = None,
) -> list[Action]:
    """Decide the next market action for one cycle.

    Args:
        settings: Strategy parameters.
        snapshot: Market snapshot of the current book.
        own_orders: The bot's own resting orders on the pair.
        balances: The bot's wallet holdings.
        observer: Receiver of informational events (defaults to none).

    Returns:
        Trades, cancels or new orders (never mixed), or an empty list.

    Raises:
        ThinBookError: If either side of the book has fewer than 2 orders.
    """
    if observer is None:
        observer = NullObserver()
    ensure_healthy_book(snapshot.book, settings.pair)
    report_market_health(snapshot, observer)

    actions = check_arbitrage(settings, snapshot, balances, observer)
    if actions:
        return actions

    actions = cleanup_orders(settings, snapshot, own_orders, observer)
    if actions:
        return actions

    actions = new_orders(settings, snapshot, own_orders, balances, observer)
    if actions:
        return actions

    observer.on_info("no_actions_required")
    return []
