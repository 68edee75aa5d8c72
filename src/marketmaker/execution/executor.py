"""Abstract executor interface.

Defines the contract for carrying out decision-engine actions. Both
PaperExecutor and LiveExecutor implement this ABC, so the runner is
identical regardless of trading mode.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from marketmaker.models import Action, CancelOrder, ExecutionReport, NewOrder, Trade


class Executor(ABC):
    """Abstract base class for action executors."""

    @abstractmethod
    async def place_order(self, action: NewOrder) -> ExecutionReport:
        """Post a new resting order."""
        ...

    @abstractmethod
    async def cancel_order(self, action: CancelOrder) -> ExecutionReport:
        """Cancel one of the bot's resting orders."""
        ...

    @abstractmethod
    async def take_order(self, action: Trade) -> ExecutionReport:
        """Fill (part of) a resting order."""
        ...

    async def execute(self, actions: Sequence[Action]) -> list[ExecutionReport]:
        """Carry out actions in order, one at a time.

        Args:
            actions: Output of one decision cycle.

        Returns:
            One report per action, in the same order.
        """
        reports: list[ExecutionReport] = []
        for action in actions:
            if isinstance(action, NewOrder):
                reports.append(await self.place_order(action))
            elif isinstance(action, CancelOrder):
                reports.append(await self.cancel_order(action))
            elif isinstance(action, Trade):
                reports.append(await self.take_order(action))
            else:
                raise TypeError(f"Unknown action: {action!r}")
        return reports
