"""Exchange client layer -- order book, balance and order access via ccxt."""

from marketmaker.exchange.ccxt_client import CcxtExchangeClient
from marketmaker.exchange.client import ExchangeClient
from marketmaker.exchange.types import decode_order, decode_order_book, round_down, round_price

__all__ = [
    "CcxtExchangeClient",
    "ExchangeClient",
    "decode_order",
    "decode_order_book",
    "round_down",
    "round_price",
]
