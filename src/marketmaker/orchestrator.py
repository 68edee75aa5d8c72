"""Main bot orchestrator -- runs decision cycles on a fixed interval.

Each iteration:
  1. DECIDE: Ask the MarketMaker for the next actions (fresh snapshot)
  2. EXECUTE: Hand the actions to the Executor (paper or live)
  3. SLEEP: Wait cycle_interval seconds

Cycles run under a lock so two cycles for the same bot never overlap.
A thin book or an exchange failure aborts the current cycle only; the
loop carries on with the next one.
"""

import asyncio

from marketmaker.config import TradingSettings
from marketmaker.exceptions import ThinBookError
from marketmaker.execution.executor import Executor
from marketmaker.logging import get_logger
from marketmaker.models import ExecutionReport
from marketmaker.strategy.market_maker import MarketMaker

logger = get_logger(__name__)


class Orchestrator:
    """Main bot loop.

    Args:
        settings: Runner settings (mode, cycle interval).
        market_maker: Per-cycle decision service.
        executor: Paper or live executor for the produced actions.
    """

    def __init__(
        self,
        settings: TradingSettings,
        market_maker: MarketMaker,
        executor: Executor,
    ) -> None:
        self._settings = settings
        self._market_maker = market_maker
        self._executor = executor
        self._running = False
        self._cycle_lock = asyncio.Lock()
        self._cycle_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    async def start(self) -> None:
        """Run cycles until stop() is called."""
        logger.info(
            "orchestrator_starting",
            mode=self._settings.mode,
            pair=self._market_maker.settings.pair,
            cycle_interval=self._settings.cycle_interval,
        )
        self._running = True
        try:
            await self._run_loop()
        finally:
            logger.info("orchestrator_stopped", cycles=self._cycle_count)

    async def stop(self) -> None:
        """Signal the orchestrator to stop after the current cycle."""
        logger.info("orchestrator_stopping_gracefully")
        self._running = False

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.run_cycle()
                await asyncio.sleep(self._settings.cycle_interval)
            except asyncio.CancelledError:
                break

    async def run_cycle(self) -> list[ExecutionReport]:
        """Run one decide-execute cycle.

        Returns:
            Execution reports; empty when there was nothing to do or the
            cycle failed.
        """
        async with self._cycle_lock:
            self._cycle_count += 1
            try:
                actions = await self._market_maker.get_actions()
            except ThinBookError as e:
                logger.error("order_book_too_thin", message=str(e))
                return []
            except Exception as e:
                logger.error("decision_cycle_failed", error=str(e), exc_info=True)
                return []

            if not actions:
                return []

            try:
                reports = await self._executor.execute(actions)
            except Exception as e:
                logger.error("execution_failed", error=str(e), exc_info=True)
                return []

            logger.info(
                "cycle_executed",
                cycle=self._cycle_count,
                actions=len(actions),
                failed=sum(1 for r in reports if not r.success),
            )
            return reports
