"""Per-cycle market maker service.

Gathers everything the decision engine needs from the exchange client,
one awaited query at a time, and returns the engine's actions. Holds no
state between cycles: every call fetches a fresh snapshot.

Callers must not run two cycles for the same bot concurrently; stale
balances would let both cycles commit the same funds.
"""

from marketmaker.config import StrategySettings
from marketmaker.exchange.client import ExchangeClient
from marketmaker.market.snapshot import MarketSnapshot
from marketmaker.models import Action, WalletBalances
from marketmaker.strategy.engine import compute_next_actions, ensure_healthy_book
from marketmaker.strategy.observer import DecisionObserver, LoggingObserver


class MarketMaker:
    """Market maker for the configured pair.

    Args:
        settings: Strategy parameters (pair, bot address, thresholds).
        exchange_client: Order book, own orders and balance source.
        observer: Receiver of decision events. Defaults to structlog.
    """

    def __init__(
        self,
        settings: StrategySettings,
        exchange_client: ExchangeClient,
        observer: DecisionObserver | None = None,
    ) -> None:
        self._settings = settings
        self._exchange_client = exchange_client
        self._observer = observer if observer is not None else LoggingObserver()

    @property
    def settings(self) -> StrategySettings:
        return self._settings

    async def get_actions(self) -> list[Action]:
        """Run one decision cycle.

        Raises:
            ThinBookError: If the book is too thin to make a market.
            Exception: Any exchange failure, propagated unchanged.
        """
        pair = self._settings.pair
        address = self._settings.bot_address

        book = await self._exchange_client.fetch_order_book(pair)
        ensure_healthy_book(book, pair)

        own_orders = await self._exchange_client.fetch_orders_for(address, pair)
        base = await self._exchange_client.fetch_base_token_balance(address)
        quote = await self._exchange_client.fetch_quote_balance(address)
        decimals = await self._exchange_client.token_decimals(self._settings.base_token)

        snapshot = MarketSnapshot.from_order_book(book)
        balances = WalletBalances(quote=quote, base=base, token_decimals=decimals)
        return compute_next_actions(
            self._settings, snapshot, own_orders, balances, self._observer
        )
