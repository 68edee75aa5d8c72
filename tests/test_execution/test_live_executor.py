"""Tests for LiveExecutor delegation to the exchange client."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from marketmaker.exchange.client import ExchangeClient
from marketmaker.execution.live_executor import LiveExecutor
from marketmaker.models import CancelOrder, NewOrder, OrderSide, Trade


@pytest.fixture
def mock_exchange_client() -> AsyncMock:
    client = AsyncMock(spec=ExchangeClient)
    client.create_order.return_value = {"id": "ex-1"}
    client.cancel_order.return_value = {}
    return client


@pytest.fixture
def executor(mock_exchange_client: AsyncMock) -> LiveExecutor:
    return LiveExecutor(mock_exchange_client, "TOKEN/ETH")


class TestLiveExecutor:
    """Tests for live order placement, trades and cancels."""

    @pytest.mark.asyncio
    async def test_place_order_on_pair(
        self, executor: LiveExecutor, mock_exchange_client: AsyncMock
    ) -> None:
        action = NewOrder(side=OrderSide.BUY, amount=Decimal("1"), price=Decimal("9.6"))
        report = await executor.place_order(action)
        mock_exchange_client.create_order.assert_awaited_once_with(
            pair="TOKEN/ETH", side=OrderSide.BUY, amount=Decimal("1"), price=Decimal("9.6")
        )
        assert report.success is True
        assert report.is_simulated is False
        assert report.order_id == "ex-1"

    @pytest.mark.asyncio
    async def test_trade_is_immediate_or_cancel(
        self, executor: LiveExecutor, mock_exchange_client: AsyncMock
    ) -> None:
        action = Trade(
            contract="TOKEN/ETH",
            order_id="target",
            amount=Decimal("2"),
            side=OrderSide.SELL,
            price=Decimal("11"),
        )
        await executor.take_order(action)
        mock_exchange_client.create_order.assert_awaited_once_with(
            pair="TOKEN/ETH",
            side=OrderSide.SELL,
            amount=Decimal("2"),
            price=Decimal("11"),
            params={"timeInForce": "IOC"},
        )

    @pytest.mark.asyncio
    async def test_cancel_order(
        self, executor: LiveExecutor, mock_exchange_client: AsyncMock
    ) -> None:
        report = await executor.cancel_order(CancelOrder(contract="TOKEN/ETH", order_id="o-1"))
        mock_exchange_client.cancel_order.assert_awaited_once_with(
            order_id="o-1", pair="TOKEN/ETH"
        )
        assert report.success is True

    @pytest.mark.asyncio
    async def test_cancel_failure_is_reported(
        self, executor: LiveExecutor, mock_exchange_client: AsyncMock
    ) -> None:
        """An order already gone is not fatal to the cycle."""
        mock_exchange_client.cancel_order.side_effect = RuntimeError("order not found")
        report = await executor.cancel_order(CancelOrder(contract="TOKEN/ETH", order_id="o-1"))
        assert report.success is False
        assert report.error == "order not found"

    @pytest.mark.asyncio
    async def test_placement_failure_propagates(
        self, executor: LiveExecutor, mock_exchange_client: AsyncMock
    ) -> None:
        mock_exchange_client.create_order.side_effect = RuntimeError("rejected")
        action = NewOrder(side=OrderSide.SELL, amount=Decimal("1"), price=Decimal("10"))
        with pytest.raises(RuntimeError, match="rejected"):
            await executor.place_order(action)
