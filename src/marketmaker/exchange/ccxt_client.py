"""Exchange client implementation via ccxt async.

Wraps any ccxt.async_support exchange with market loading, order book and
balance queries decoded into typed models, and async cleanup.
"""

from decimal import Decimal

import ccxt.async_support as ccxt_async
from ccxt.base.decimal_to_precision import TICK_SIZE

from marketmaker.config import ExchangeSettings
from marketmaker.exchange.client import ExchangeClient
from marketmaker.exchange.types import (
    decimals_from_precision,
    decode_order_book,
    partition_own_orders,
    to_decimal,
)
from marketmaker.logging import get_logger
from marketmaker.models import OrderBook, OrderSide

logger = get_logger(__name__)


class CcxtExchangeClient(ExchangeClient):
    """Concrete exchange client using ccxt async.

    Args:
        settings: Exchange settings (ccxt id and credentials).
        pair: The traded pair; balance queries refer to its currencies.
        exchange: Optional pre-built ccxt exchange instance (used in tests).
    """

    def __init__(
        self, settings: ExchangeSettings, pair: str, exchange=None
    ) -> None:
        self._settings = settings
        self._pair = pair
        if exchange is None:
            exchange_class = getattr(ccxt_async, settings.exchange_id)
            config: dict = {
                "apiKey": settings.api_key.get_secret_value(),
                "secret": settings.api_secret.get_secret_value(),
                "walletAddress": settings.wallet_address,
                "privateKey": settings.private_key.get_secret_value(),
                "enableRateLimit": True,
            }
            exchange = exchange_class(config)
            if settings.sandbox:
                exchange.set_sandbox_mode(True)
        self._exchange = exchange
        self._markets: dict = {}

    @property
    def exchange(self):
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        """Initialize connection by loading markets."""
        logger.info("connecting_to_exchange", exchange=self._settings.exchange_id)
        self._markets = await self._exchange.load_markets()
        logger.info(
            "exchange_connected",
            exchange=self._settings.exchange_id,
            market_count=len(self._markets),
        )

    async def close(self) -> None:
        """Clean up ccxt async resources. CRITICAL: must be called to avoid resource leaks."""
        logger.info("closing_exchange_connection")
        await self._exchange.close()
        logger.info("exchange_connection_closed")

    @staticmethod
    def _account_params(address: str) -> dict:
        # DEX-style exchanges address accounts by wallet; CEX accounts leave it empty
        return {"user": address} if address else {}

    async def fetch_order_book(self, pair: str) -> OrderBook:
        """Fetch resting liquidity, preferring per-order (L3) books."""
        if self._exchange.has.get("fetchL3OrderBook"):
            raw = await self._exchange.fetch_l3_order_book(pair)
        else:
            raw = await self._exchange.fetch_order_book(pair)
        book = decode_order_book(raw, contract=pair)
        logger.debug(
            "fetched_order_book",
            pair=pair,
            buys=len(book.buys),
            sells=len(book.sells),
        )
        return book

    async def fetch_orders_for(self, address: str, pair: str) -> OrderBook:
        """Fetch the address's open orders on the pair, split by side."""
        raw_orders = await self._exchange.fetch_open_orders(
            pair, params=self._account_params(address)
        )
        return partition_own_orders(raw_orders, pair)

    async def _balance_entry(self, address: str, currency: str) -> dict:
        balance = await self._exchange.fetch_balance(
            params=self._account_params(address)
        )
        return balance.get(currency) or {}

    async def fetch_base_token_balance(self, address: str) -> Decimal:
        """Total base token holdings, including inventory locked in open sells."""
        base = self._base_currency()
        entry = await self._balance_entry(address, base)
        return to_decimal(entry.get("total") or 0, f"{base} balance")

    async def fetch_quote_balance(self, address: str) -> Decimal:
        """Free quote currency, net of funds locked in open orders."""
        quote = self._quote_currency()
        entry = await self._balance_entry(address, quote)
        return to_decimal(entry.get("free") or 0, f"{quote} balance")

    async def token_decimals(self, token: str) -> int:
        """Amount precision of the first market whose base is the token."""
        if not self._markets:
            self._markets = await self._exchange.load_markets()

        for market in self._markets.values():
            if market.get("base") == token:
                precision = market.get("precision", {}).get("amount")
                return decimals_from_precision(
                    precision, self._exchange.precisionMode == TICK_SIZE
                )
        raise ValueError(f"Token {token} not found in loaded markets")

    async def create_order(
        self,
        pair: str,
        side: OrderSide,
        amount: Decimal,
        price: Decimal,
        params: dict | None = None,
    ) -> dict:
        """Place a limit order via ccxt."""
        logger.info(
            "creating_order",
            pair=pair,
            side=side.value,
            amount=str(amount),
            price=str(price),
        )
        return await self._exchange.create_order(
            pair, "limit", side.value, float(amount), float(price), params=params or {}
        )

    async def cancel_order(
        self, order_id: str, pair: str, params: dict | None = None
    ) -> dict:
        """Cancel an open order via ccxt."""
        logger.info("cancelling_order", order_id=order_id, pair=pair)
        return await self._exchange.cancel_order(order_id, pair, params=params or {})

    def _base_currency(self) -> str:
        market = self._markets.get(self._pair) or {}
        return market.get("base") or self._pair.split("/")[0]

    def _quote_currency(self) -> str:
        market = self._markets.get(self._pair) or {}
        return market.get("quote") or self._pair.split("/")[-1].split(":")[0]
