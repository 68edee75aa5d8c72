"""Observers receiving informational events from the decision engine.

The engine never logs directly; it reports through an injected observer so
it stays pure and testable. LoggingObserver is the production observer.
"""

from typing import Any, Protocol

import structlog

from marketmaker.logging import get_logger


class DecisionObserver(Protocol):
    """Receiver of informational decision events."""

    def on_info(self, event: str, **fields: Any) -> None: ...


class NullObserver:
    """Discards every event."""

    def on_info(self, event: str, **fields: Any) -> None:
        return None


class LoggingObserver:
    """Forwards every event to structlog at INFO level."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or get_logger("marketmaker.strategy")

    def on_info(self, event: str, **fields: Any) -> None:
        self._logger.info(event, **fields)
