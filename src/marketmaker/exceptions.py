"""Custom exceptions for the market maker.

All decision-layer and boundary-decoding exceptions live here
to avoid circular imports between modules.
"""


class MarketMakerError(Exception):
    """Base exception for all market maker errors."""


class ThinBookError(MarketMakerError):
    """Raised when the order book is too thin for the strategy to run.

    Fatal for the current cycle. The caller decides whether to try again
    on the next cycle; the strategy never retries internally.
    """


class QuoteComputationError(ThinBookError):
    """Raised when a best price or mid-price is undefined.

    Happens when one side of the book is empty or the book carries no
    depth at all. Should not occur once the book-health guard has passed.
    """


class OrderDecodeError(MarketMakerError):
    """Raised when a raw exchange order record fails validation."""
