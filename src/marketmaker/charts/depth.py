"""Text depth chart of an order book.

Renders cumulative depth of both sides as a step line on a fixed 8-row
character grid with a labelled y-axis, suitable for a terminal or a log line.

Side naming: depth charts show liquidity from the taker's point of view,
while the book handed to us is the maker's. The chart therefore plots the
raw SELL orders as its buy curve (liquidity a buyer can take, descending
from full depth at the axis) and the raw BUY orders as its sell curve
(ascending from zero, to the right of the buy curve).

CRITICAL: Depth math uses Decimal. Rounding to grid rows is half-up.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from marketmaker.charts.outliers import filter_outliers
from marketmaker.market.snapshot import side_depth
from marketmaker.models import Order

HEIGHT = 8
_OFFSET = 3  # columns reserved for the label and axis
_LABEL_WIDTH = 11
_CENT = Decimal("0.01")

_AXIS = "┤"
_AXIS_START = "┼"
_FLAT = "─"
_VERTICAL = "│"
_TRUNCATED = "↑"


@dataclass(frozen=True)
class DepthChartData:
    """The arrays actually plotted, after the side swap and outlier filter."""

    buys: tuple[Order, ...]
    sells: tuple[Order, ...]
    truncated: bool = False


def prepare_depth_chart(
    book_buys: Sequence[Order], book_sells: Sequence[Order]
) -> DepthChartData:
    """Swap the maker's book into taker sides, filter outliers and sort.

    The plotted buy side is the raw sell liquidity, ascending by price.
    The plotted sell side is the raw buy liquidity, consumed best bid first
    by the outlier filter and then sorted ascending by price.
    """
    plotted_buys = tuple(sorted(book_sells, key=lambda o: o.price))
    best_first = sorted(book_buys, key=lambda o: o.price, reverse=True)
    filtered = filter_outliers(best_first, side_depth(plotted_buys))
    plotted_sells = tuple(sorted(filtered.orders, key=lambda o: o.price))
    return DepthChartData(
        buys=plotted_buys, sells=plotted_sells, truncated=filtered.truncated
    )


def _format_label(value: Decimal) -> str:
    text = f"{value.quantize(_CENT, rounding=ROUND_HALF_UP):f}"
    return (" " * _LABEL_WIDTH + text)[-_LABEL_WIDTH:]


def _scale(depth: Decimal, ratio: Decimal) -> int:
    row = int((depth * ratio).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return min(max(row, 0), HEIGHT)


def _descending_depths(orders: Sequence[Order], total: Decimal) -> list[Decimal]:
    depths = []
    remaining = total
    for order in orders:
        remaining -= order.notional
        depths.append(remaining)
    return depths


def _ascending_depths(orders: Sequence[Order]) -> list[Decimal]:
    depths = []
    running = Decimal("0")
    for order in orders:
        running += order.notional
        depths.append(running)
    return depths


def _draw_step(grid: list[list[str]], column: int, y0: int, y1: int) -> None:
    """Draw the move from level y0 to level y1 within one column."""
    if y0 == y1:
        grid[HEIGHT - y0][column] = _FLAT
        return
    falling = y0 > y1
    grid[HEIGHT - y1][column] = "╰" if falling else "╭"
    grid[HEIGHT - y0][column] = "╮" if falling else "╯"
    for y in range(min(y0, y1) + 1, max(y0, y1)):
        grid[HEIGHT - y][column] = _VERTICAL


def plot_depth(
    buys: Sequence[Order], sells: Sequence[Order], truncated: bool = False
) -> str:
    """Render already-plotted sides (ascending by price) to text.

    Pure function: the same input always yields the same text. Returns
    HEIGHT + 1 lines of equal width. Empty sides and a book with zero depth
    render as flat charts rather than failing.

    Args:
        buys: Plotted buy side (descending curve, drawn first).
        sells: Plotted sell side (ascending curve, drawn to the right).
        truncated: Mark the top-right cell to show the sell side was cut.

    Returns:
        The chart, rows joined by newlines.
    """
    buy_depth = side_depth(buys)
    top = max(buy_depth, side_depth(sells))
    ratio = Decimal(HEIGHT) / top if top > 0 else Decimal("0")
    width = len(buys) + len(sells) + _OFFSET

    grid = [[" "] * width for _ in range(HEIGHT + 1)]

    for y in range(HEIGHT + 1):
        grid[y][0] = _format_label(top - y * top / HEIGHT)
        grid[y][_OFFSET - 1] = _AXIS

    buy_levels = [_scale(d, ratio) for d in _descending_depths(buys, buy_depth)]
    if buy_levels:
        grid[HEIGHT - buy_levels[0]][_OFFSET - 1] = _AXIS_START
    for x in range(len(buy_levels) - 1):
        _draw_step(grid, _OFFSET + x, buy_levels[x], buy_levels[x + 1])

    start = _OFFSET + max(len(buys) - 1, 0)
    previous = 0
    for x, level in enumerate(_scale(d, ratio) for d in _ascending_depths(sells)):
        _draw_step(grid, start + x, previous, level)
        previous = level

    if truncated:
        grid[0][width - 1] = _TRUNCATED

    return "\n".join("".join(row) for row in grid)


def render_depth_chart(book_buys: Sequence[Order], book_sells: Sequence[Order]) -> str:
    """Render the maker's raw book sides as a depth chart.

    Args:
        book_buys: Raw buy orders, any order.
        book_sells: Raw sell orders, any order.

    Returns:
        The chart text (HEIGHT + 1 lines).
    """
    data = prepare_depth_chart(book_buys, book_sells)
    return plot_depth(data.buys, data.sells, data.truncated)
