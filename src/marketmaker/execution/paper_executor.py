"""Paper trading executor.

Logs every action and reports it as done without touching the exchange.
The next cycle sees the unchanged real book, so paper mode shows what the
bot would do in the current market.
"""

from uuid import uuid4

from marketmaker.execution.executor import Executor
from marketmaker.logging import get_logger
from marketmaker.models import CancelOrder, ExecutionReport, NewOrder, Trade

logger = get_logger(__name__)


def _paper_id() -> str:
    return f"paper_{uuid4().hex[:12]}"


class PaperExecutor(Executor):
    """Simulated executor. All reports have is_simulated=True."""

    async def place_order(self, action: NewOrder) -> ExecutionReport:
        order_id = _paper_id()
        logger.info(
            "paper_order_placed",
            order_id=order_id,
            side=action.side.value,
            amount=str(action.amount),
            price=str(action.price),
        )
        return ExecutionReport(
            action=action, success=True, order_id=order_id, is_simulated=True
        )

    async def cancel_order(self, action: CancelOrder) -> ExecutionReport:
        logger.info(
            "paper_order_cancelled",
            order_id=action.order_id,
            contract=action.contract,
        )
        return ExecutionReport(
            action=action, success=True, order_id=action.order_id, is_simulated=True
        )

    async def take_order(self, action: Trade) -> ExecutionReport:
        order_id = _paper_id()
        logger.info(
            "paper_trade_filled",
            order_id=order_id,
            target_order_id=action.order_id,
            contract=action.contract,
            side=action.side.value,
            amount=str(action.amount),
            price=str(action.price),
        )
        return ExecutionReport(
            action=action, success=True, order_id=order_id, is_simulated=True
        )
