"""Boundary decoding and rounding utilities for exchange data.

Raw, loosely-typed exchange records are turned into typed Order and
OrderBook values here, before they reach the strategy.

All monetary values use Decimal. Never use float for prices, quantities, or fees.
"""

from collections.abc import Iterable, Mapping, Sequence
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from marketmaker.exceptions import OrderDecodeError
from marketmaker.models import Order, OrderBook, OrderSide

_BALANCE_KEYS = ("balance", "remaining", "amount")
_ID_KEYS = ("order_id", "id", "transaction", "order_tx")
_CONTRACT_KEYS = ("contract", "symbol")


def _first(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def to_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert an exchange number (str, int, float) to Decimal via str()."""
    if value is None:
        raise OrderDecodeError(f"Missing {name}")
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise OrderDecodeError(f"Invalid {name}: {value!r}") from e
    if not result.is_finite():
        raise OrderDecodeError(f"Invalid {name}: {value!r}")
    return result


def decode_order(raw: Mapping[str, Any], contract: str | None = None) -> Order:
    """Decode and validate a single raw order record.

    Accepts native records (price/balance/contract/order_id) as well as
    ccxt order structures (price/remaining/symbol/id).

    Args:
        raw: The raw order mapping.
        contract: Fallback contract when the record does not carry one.

    Returns:
        A typed, immutable Order.

    Raises:
        OrderDecodeError: On missing fields, price <= 0 or balance < 0.
    """
    price = to_decimal(raw.get("price"), "price")
    balance = to_decimal(_first(raw, _BALANCE_KEYS), "balance")
    if price <= Decimal("0"):
        raise OrderDecodeError(f"Order price must be positive, got {price}")
    if balance < Decimal("0"):
        raise OrderDecodeError(f"Order balance must be >= 0, got {balance}")

    order_id = _first(raw, _ID_KEYS)
    order_contract = _first(raw, _CONTRACT_KEYS) or contract
    if order_id is None or order_contract is None:
        raise OrderDecodeError(f"Order record lacks contract/order id: {dict(raw)!r}")

    return Order(
        price=price,
        balance=balance,
        contract=str(order_contract),
        order_id=str(order_id),
    )


def decode_level(level: Sequence[Any], contract: str) -> Order:
    """Decode a ccxt book entry: [price, amount] (L2) or [price, amount, id] (L3).

    L2 entries are aggregated price levels; they receive a price-level id
    "<contract>@<price>".
    """
    if len(level) < 2:
        raise OrderDecodeError(f"Malformed book level: {level!r}")
    price = to_decimal(level[0], "price")
    if len(level) >= 3 and level[2] is not None:
        order_id = str(level[2])
    else:
        order_id = f"{contract}@{price}"
    return decode_order(
        {"price": level[0], "balance": level[1], "order_id": order_id},
        contract=contract,
    )


def decode_order_book(raw: Mapping[str, Any], contract: str) -> OrderBook:
    """Decode a raw order book.

    Supports {"buys": [...], "sells": [...]} order records and ccxt
    {"bids": [...], "asks": [...]} level lists.
    """
    if "buys" in raw or "sells" in raw:
        buys = tuple(decode_order(o, contract) for o in raw.get("buys") or [])
        sells = tuple(decode_order(o, contract) for o in raw.get("sells") or [])
    else:
        buys = tuple(decode_level(level, contract) for level in raw.get("bids") or [])
        sells = tuple(decode_level(level, contract) for level in raw.get("asks") or [])
    return OrderBook(buys=buys, sells=sells)


def partition_own_orders(raw_orders: Iterable[Mapping[str, Any]], pair: str) -> OrderBook:
    """Split the bot's own open orders for a pair into buys and sells.

    Orders on other pairs are ignored.
    """
    buys: list[Order] = []
    sells: list[Order] = []
    for raw in raw_orders:
        if raw.get("symbol", pair) != pair:
            continue
        side = str(raw.get("side", "")).lower()
        if side == OrderSide.BUY.value:
            buys.append(decode_order(raw, pair))
        elif side == OrderSide.SELL.value:
            sells.append(decode_order(raw, pair))
    return OrderBook(buys=tuple(buys), sells=tuple(sells))


def round_down(value: Decimal, decimals: int) -> Decimal:
    """Truncate a quantity to the given number of decimals.

    Always rounds toward zero, which prevents exceeding available holdings.
    """
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_DOWN)


def round_price(value: Decimal, decimals: int) -> Decimal:
    """Round a price half-up to the given number of decimals."""
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def decimals_from_precision(precision: Any, tick_size_mode: bool) -> int:
    """Convert a ccxt market precision into a number of decimal places.

    Args:
        precision: market["precision"]["amount"] as reported by ccxt.
        tick_size_mode: True when the exchange reports precision as a
            step size (e.g. 0.001) rather than a count of decimals.

    Returns:
        Number of decimal places (never negative).
    """
    if precision is None:
        raise ValueError("Market does not report an amount precision")
    value = Decimal(str(precision))
    if not tick_size_mode:
        return max(int(value), 0)
    exponent = value.normalize().as_tuple().exponent
    return max(-int(exponent), 0)
