"""Shared data models for the market maker.

CRITICAL: All monetary values use Decimal. Never use float for prices, balances, or depth.
Orders and books are immutable snapshots fetched fresh every cycle.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class ActionType(str, Enum):
    """Kind of market action produced by the decision engine."""

    NEW_ORDER = "NewOrder"
    CANCEL_ORDER = "CancelOrder"
    TRADE = "Trade"


@dataclass(frozen=True)
class Order:
    """One resting liquidity entry on one side of the book.

    The side is implied by which sequence of an OrderBook holds the order.
    """

    price: Decimal  # quote currency per unit of base token
    balance: Decimal  # remaining base-token amount
    contract: str
    order_id: str

    @property
    def notional(self) -> Decimal:
        """Order value in quote currency (balance x price)."""
        return self.balance * self.price


@dataclass(frozen=True)
class OrderBook:
    """Resting buys and sells for one pair, in no guaranteed order."""

    buys: tuple[Order, ...] = ()
    sells: tuple[Order, ...] = ()


@dataclass(frozen=True)
class WalletBalances:
    """Wallet holdings of the bot for one cycle."""

    quote: Decimal  # quote currency, already net of exchange-side locks
    base: Decimal  # base token holdings, including inventory locked in own sells
    token_decimals: int


@dataclass(frozen=True)
class NewOrder:
    """Post a new resting order."""

    side: OrderSide
    amount: Decimal
    price: Decimal
    type: ActionType = field(default=ActionType.NEW_ORDER, init=False)


@dataclass(frozen=True)
class CancelOrder:
    """Cancel one of the bot's own resting orders."""

    contract: str
    order_id: str
    type: ActionType = field(default=ActionType.CANCEL_ORDER, init=False)


@dataclass(frozen=True)
class Trade:
    """Take (part of) a resting order.

    side is the bot's side of the fill: BUY when hitting a resting sell.
    price is the target order's price, carried for execution.
    """

    contract: str
    order_id: str
    amount: Decimal
    side: OrderSide
    price: Decimal
    type: ActionType = field(default=ActionType.TRADE, init=False)


Action = NewOrder | CancelOrder | Trade


@dataclass
class ExecutionReport:
    """Outcome of handing one action to an executor."""

    action: Action
    success: bool
    order_id: str = ""
    is_simulated: bool = False
    error: str = ""
