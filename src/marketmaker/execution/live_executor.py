"""Live executor via exchange client.

Delegates all order operations to the ExchangeClient (ccxt wrapper).
Placement and trade failures propagate; cancel failures are logged and
reported, since the order may already be filled or gone.
"""

from marketmaker.exchange.client import ExchangeClient
from marketmaker.execution.executor import Executor
from marketmaker.logging import get_logger
from marketmaker.models import CancelOrder, ExecutionReport, NewOrder, Trade

logger = get_logger(__name__)


class LiveExecutor(Executor):
    """Real executor that delegates to an exchange client.

    Args:
        exchange_client: The exchange client to send orders through.
        pair: The traded pair new orders are placed on.
    """

    def __init__(self, exchange_client: ExchangeClient, pair: str) -> None:
        self._exchange_client = exchange_client
        self._pair = pair

    async def place_order(self, action: NewOrder) -> ExecutionReport:
        result = await self._exchange_client.create_order(
            pair=self._pair,
            side=action.side,
            amount=action.amount,
            price=action.price,
        )
        order_id = str(result.get("id", ""))
        logger.info(
            "live_order_placed",
            order_id=order_id,
            side=action.side.value,
            amount=str(action.amount),
            price=str(action.price),
        )
        return ExecutionReport(action=action, success=True, order_id=order_id)

    async def take_order(self, action: Trade) -> ExecutionReport:
        """Hit the target order with an immediate-or-cancel limit at its price."""
        result = await self._exchange_client.create_order(
            pair=action.contract,
            side=action.side,
            amount=action.amount,
            price=action.price,
            params={"timeInForce": "IOC"},
        )
        order_id = str(result.get("id", ""))
        logger.info(
            "live_trade_sent",
            order_id=order_id,
            target_order_id=action.order_id,
            side=action.side.value,
            amount=str(action.amount),
            price=str(action.price),
        )
        return ExecutionReport(action=action, success=True, order_id=order_id)

    async def cancel_order(self, action: CancelOrder) -> ExecutionReport:
        try:
            await self._exchange_client.cancel_order(
                order_id=action.order_id, pair=action.contract
            )
        except Exception as e:
            logger.warning(
                "live_order_cancel_failed",
                order_id=action.order_id,
                contract=action.contract,
                exc_info=True,
            )
            return ExecutionReport(
                action=action, success=False, order_id=action.order_id, error=str(e)
            )
        logger.info(
            "live_order_cancelled",
            order_id=action.order_id,
            contract=action.contract,
        )
        return ExecutionReport(action=action, success=True, order_id=action.order_id)
