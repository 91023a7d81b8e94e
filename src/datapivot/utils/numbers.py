"""Best-effort numeric interpretation of text cells.

Cells are always text, numbers are only ever a local
interpretation done by the operation that needs them.
A value that can't be parsed is never an error, the caller
decides how to fall back.

Only finite numbers count, ``"nan"`` and ``"inf"`` are text
like any other word.

>>> parse_number("10")
10.0
>>> parse_number("ten") is None
True
>>> parse_number("nan") is None
True
>>> format_number(60.0)
'60.0'
>>> format_number(1e16)
'10000000000000000.0'
"""

import math
from decimal import Decimal


def parse_number(value: str) -> float | None:
    """Parse a cell as a finite float, ``None`` when it is not numeric."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_numbers(values: list[str]) -> list[float] | None:
    """Parse all the cells or none of them.

    Returns ``None`` as soon as one of the values is not numeric,
    which is what aggregations need to decide their fallback.
    """
    numbers = []
    for value in values:
        number = parse_number(value)
        if number is None:
            return None
        numbers.append(number)
    return numbers


def format_number(value: float) -> str:
    """Format a number as a decimal with at least one fractional digit.

    Digits are the shortest ones that round trip, as ``repr`` picks them,
    but never in exponent notation.

    >>> format_number(0.00001), format_number(-2.5e20)
    ('0.00001', '-250000000000000000000.0')
    """
    text = repr(float(value))
    if "e" in text:
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text


def compare_cells(a: str, b: str) -> int:
    """Three way comparison of two cells.

    Compare numerically when both cells are numbers,
    otherwise fallback to comparing the raw strings.

    >>> compare_cells("9", "10")
    -1
    >>> compare_cells("b", "a")
    1
    """
    na, nb = parse_number(a), parse_number(b)
    if na is not None and nb is not None:
        return (na > nb) - (na < nb)
    return (a > b) - (a < b)
