"""Entry point for the market maker.

Wires all components together and starts the orchestrator.
Handles SIGINT/SIGTERM for graceful shutdown.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. ExchangeClient (ccxt)
4. MarketMaker (decision cycle)
5. Executor (PaperExecutor or LiveExecutor based on mode)
6. Orchestrator (cycle loop)
"""

import asyncio
import signal
from typing import Any

from marketmaker.config import AppSettings
from marketmaker.exchange.ccxt_client import CcxtExchangeClient
from marketmaker.execution.executor import Executor
from marketmaker.logging import get_logger, setup_logging
from marketmaker.orchestrator import Orchestrator
from marketmaker.strategy.market_maker import MarketMaker


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all components from settings.

    Note: Does NOT call exchange_client.connect() -- that happens in run().
    """
    logger = get_logger("marketmaker.main")

    exchange_client = CcxtExchangeClient(settings.exchange, settings.strategy.pair)

    if settings.trading.mode == "live" and not settings.strategy.bot_address:
        logger.warning(
            "no_bot_address_configured",
            mode="live",
            note="Account-scoped queries rely on exchange credentials only.",
        )

    market_maker = MarketMaker(settings.strategy, exchange_client)

    executor: Executor
    if settings.trading.mode == "paper":
        from marketmaker.execution.paper_executor import PaperExecutor

        executor = PaperExecutor()
    else:
        from marketmaker.execution.live_executor import LiveExecutor

        executor = LiveExecutor(exchange_client, settings.strategy.pair)

    orchestrator = Orchestrator(settings.trading, market_maker, executor)

    return {
        "exchange_client": exchange_client,
        "market_maker": market_maker,
        "executor": executor,
        "orchestrator": orchestrator,
    }


def _setup_signal_handlers(orchestrator: Orchestrator) -> None:
    """Register SIGINT/SIGTERM to stop the orchestrator gracefully.

    Must be called after the asyncio event loop is running.
    """
    logger = get_logger("marketmaker.main")
    loop = asyncio.get_running_loop()

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        asyncio.create_task(orchestrator.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler)


async def run() -> None:
    """Run the market maker until a shutdown signal arrives."""
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("marketmaker.main")

    components = _build_components(settings)
    _setup_signal_handlers(components["orchestrator"])

    logger.info(
        "starting_market_maker",
        exchange=settings.exchange.exchange_id,
        pair=settings.strategy.pair,
        mode=settings.trading.mode,
        spread=str(settings.strategy.spread),
        band_size=str(settings.strategy.band_size),
    )

    try:
        await components["exchange_client"].connect()
        await components["orchestrator"].start()
    finally:
        await components["exchange_client"].close()
        logger.info("market_maker_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
