"""Draw simple charts of table data as text.

Charts are meant for quick inspection of data in a terminal,
like :mod:`datapivot.utils.tabulate` they only read tables.

Cells that are not numbers are skipped when drawing,
and missing columns lead to an error message instead of the chart.

>>> from datapivot.table import Table
>>> data = Table.from_columns({"Category": ["A", "B"], "Value": ["10", "20"]})
>>> print(draw_bar_chart(data, "Category", "Value", max_width=30))
Value by Category
=================
<BLANKLINE>
A        | ********** 10
B        | ******************** 20
"""

import enum

from ..table import Table
from .numbers import parse_number


class ChartType(enum.Enum):
    """How :func:`draw_line_chart` plots the points."""

    LINE = "line"
    SCATTER = "scatter"


def _chart_title(y_label: str, joiner: str, x_label: str) -> list[str]:
    title = f"{y_label} {joiner} {x_label}"
    return [title, "=" * len(title), ""]


def draw_bar_chart(
    table: Table, label_column: str, value_column: str, max_width: int = 60
) -> str:
    """Draw an horizontal bar chart of ``value_column`` for each ``label_column``.

    Bars are scaled so that the largest value takes ``max_width - 10`` characters.
    """
    if not (table.has_column(label_column) and table.has_column(value_column)):
        return "Error: Columns not found"

    labels = table.get_column(label_column)
    values = table.get_column(value_column)
    numbers = [parse_number(v) for v in values]

    max_value = max([n for n in numbers if n is not None] + [0.0])
    scale = (max_width - 10) / max_value if max_value > 0 else 0.0
    label_width = max([len(label) for label in labels] + [len(label_column)])

    lines = _chart_title(value_column, "by", label_column)
    for label, text, number in zip(labels, values, numbers):
        if number is None:
            continue
        bar = "*" * max(int(number * scale), 0)
        lines.append(f"{label.ljust(label_width)} | {bar} {text}")
    return "\n".join(lines)


def draw_line_chart(
    table: Table,
    x_column: str,
    y_column: str,
    width: int = 60,
    height: int = 20,
    chart_type: ChartType = ChartType.LINE,
) -> str:
    """Draw ``y_column`` against ``x_column`` on a ``width`` x ``height`` grid.

    With :attr:`ChartType.LINE` points are sorted by x and joined by lines,
    with :attr:`ChartType.SCATTER` each point is drawn as a ``*``.
    A legend with the range of both axes follows the chart.
    """
    if not (table.has_column(x_column) and table.has_column(y_column)):
        return "Error: Columns not found"

    points = []
    for x, y in zip(table.get_column(x_column), table.get_column(y_column)):
        x, y = parse_number(x), parse_number(y)
        if x is not None and y is not None:
            points.append((x, y))
    if not points:
        return "Error: No valid data points"

    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)

    # Leave some padding around the points.
    range_x, range_y = max_x - min_x, max_y - min_y
    min_x, max_x = min_x - range_x * 0.05, max_x + range_x * 0.05
    min_y, max_y = min_y - range_y * 0.05, max_y + range_y * 0.05

    scale_x = (width - 1) / (max_x - min_x) if max_x > min_x else 1.0
    scale_y = (height - 1) / (max_y - min_y) if max_y > min_y else 1.0

    def to_grid(x: float, y: float) -> tuple[int, int]:
        return int((x - min_x) * scale_x), height - 1 - int((y - min_y) * scale_y)

    grid = [[" "] * width for _ in range(height)]

    def plot(col: int, row: int, char: str) -> None:
        if 0 <= col < width and 0 <= row < height:
            grid[row][col] = char

    origin_x = min(max(int((0 - min_x) * scale_x), 0), width - 1)
    origin_y = height - 1 - min(max(int((0 - min_y) * scale_y), 0), height - 1)
    for row in range(height):
        grid[row][origin_x] = "|"
    for col in range(width):
        grid[origin_y][col] = "-"
    grid[origin_y][origin_x] = "+"

    if chart_type is ChartType.SCATTER:
        for x, y in points:
            plot(*to_grid(x, y), "*")
    else:
        points.sort(key=lambda p: p[0])
        for (x1, y1), (x2, y2) in zip(points, points[1:]):
            _draw_segment(plot, to_grid(x1, y1), to_grid(x2, y2))

    lines = _chart_title(y_column, "vs", x_column)
    lines.extend("".join(row) for row in grid)
    lines.append("")
    lines.append(f"X-axis: {x_column} ({min_x} to {max_x})")
    lines.append(f"Y-axis: {y_column} ({min_y} to {max_y})")
    return "\n".join(lines)


def _draw_segment(plot, start: tuple[int, int], end: tuple[int, int]) -> None:
    """Draw a segment on the grid using Bresenham's line algorithm."""
    (x1, y1), (x2, y2) = start, end
    dx, dy = abs(x2 - x1), abs(y2 - y1)
    if dx == 0:
        for y in range(min(y1, y2), max(y1, y2) + 1):
            plot(x1, y, "|")
        return
    if dy == 0:
        for x in range(min(x1, x2), max(x1, x2) + 1):
            plot(x, y1, "-")
        return

    char = "-" if dx > dy else "|"
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = (dx if dx > dy else -dy) // 2
    x, y = x1, y1
    while True:
        plot(x, y, char)
        if x == x2 and y == y2:
            break
        e2 = err
        if e2 > -dx:
            err -= dy
            x += sx
        if e2 < dy:
            err += dx
            y += sy
