"""Abstract exchange client interface.

Defines the collaborator contract the market maker depends on: order book
queries, the bot's own orders, wallet balances and token precision, plus the
order primitives the live executor needs. Strategy code depends only on this
interface, keeping exchange-specific details in the concrete implementation.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from marketmaker.models import OrderBook, OrderSide


class ExchangeClient(ABC):
    """Abstract base class for exchange API clients."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection and load markets."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (CRITICAL for ccxt async)."""
        ...

    @abstractmethod
    async def fetch_order_book(self, pair: str) -> OrderBook:
        """Return all resting liquidity for a pair, both sides, any order."""
        ...

    @abstractmethod
    async def fetch_orders_for(self, address: str, pair: str) -> OrderBook:
        """Return only the given address's resting orders on a pair."""
        ...

    @abstractmethod
    async def fetch_base_token_balance(self, address: str) -> Decimal:
        """Return the base token holdings of an address."""
        ...

    @abstractmethod
    async def fetch_quote_balance(self, address: str) -> Decimal:
        """Return the quote currency holdings of an address."""
        ...

    @abstractmethod
    async def token_decimals(self, token: str) -> int:
        """Return the amount precision (decimal places) of a token."""
        ...

    @abstractmethod
    async def create_order(
        self,
        pair: str,
        side: OrderSide,
        amount: Decimal,
        price: Decimal,
        params: dict | None = None,
    ) -> dict:
        """Place a limit order on the exchange."""
        ...

    @abstractmethod
    async def cancel_order(
        self, order_id: str, pair: str, params: dict | None = None
    ) -> dict:
        """Cancel an open order."""
        ...
