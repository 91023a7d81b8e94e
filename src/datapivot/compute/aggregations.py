"""Aggregation functions reducing many cells to one.

An aggregation is any callable that receives the list of cells
of a group and returns a single cell. They are used by
:func:`datapivot.compute.aggregate.group_by` and
:func:`datapivot.compute.pivot.pivot` to reduce the rows
that fall in the same group.

The built-in aggregations interpret cells as numbers
when they can, and fallback to a well known value when they can't:

>>> SumAggregation()(["10", "20", "30"])
'60.0'
>>> SumAggregation()(["10", "invalid", "30"])
'0'
>>> MaxAggregation()(["a", "b", "c"])
'c'

Built-ins are registered by name, so that users can refer to them
as strings, and custom aggregations can be registered too:

>>> get_aggregation("count")(["x", "y"])
'2'
>>> register_aggregation("first", lambda values: values[0] if values else "")
>>> get_aggregation("first")(["x", "y"])
'x'
>>> unregister_aggregation("first")

Built-ins can't be replaced or removed:

>>> register_aggregation("sum", len)
Traceback (most recent call last):
    ...
ValueError: Cannot replace the built-in aggregation 'sum'
"""

import abc
import logging
from typing import Callable

from ..utils.numbers import format_number, parse_numbers

__all__ = (
    "AggregationFunction",
    "Aggregation",
    "SumAggregation",
    "MeanAggregation",
    "CountAggregation",
    "MaxAggregation",
    "MinAggregation",
    "get_aggregation",
    "register_aggregation",
    "unregister_aggregation",
    "available_aggregations",
)

logger = logging.getLogger(__name__)

AggregationFunction = Callable[[list[str]], str]


class Aggregation(abc.ABC):
    """Base class for the built-in aggregations.

    Every aggregation is expected to be deterministic,
    the same list of cells must always lead to the same result.
    """

    name: str = ""

    def __str__(self) -> str:
        return f"{self.__class__.__name__}()"

    __repr__ = __str__

    @abc.abstractmethod
    def __call__(self, values: list[str]) -> str: ...


class SumAggregation(Aggregation):
    """Sum of the values, ``"0"`` if any of them is not a number."""

    name = "sum"

    def __call__(self, values: list[str]) -> str:
        if not values:
            return "0"
        numbers = parse_numbers(values)
        if numbers is None:
            return "0"
        return format_number(sum(numbers))


class MeanAggregation(Aggregation):
    """Average of the values, ``"0"`` if any of them is not a number."""

    name = "avg"

    def __call__(self, values: list[str]) -> str:
        if not values:
            return "0"
        numbers = parse_numbers(values)
        if numbers is None:
            return "0"
        return format_number(sum(numbers) / len(numbers))


class CountAggregation(Aggregation):
    """Number of values, whatever they contain."""

    name = "count"

    def __call__(self, values: list[str]) -> str:
        return str(len(values))


class ExtremeAggregation(Aggregation):
    """Provide a base implementation for min and max.

    When all values are numbers the numeric extreme is returned,
    as soon as one of them is not a number the whole comparison
    falls back to comparing the raw strings.
    """

    @abc.abstractmethod
    def _pick(self, values: list) -> object: ...

    def __call__(self, values: list[str]) -> str:
        if not values:
            return ""
        numbers = parse_numbers(values)
        if numbers is None:
            return self._pick(values)
        return format_number(self._pick(numbers))


class MaxAggregation(ExtremeAggregation):
    """Largest of the values."""

    name = "max"

    def _pick(self, values: list) -> object:
        return max(values)


class MinAggregation(ExtremeAggregation):
    """Smallest of the values."""

    name = "min"

    def _pick(self, values: list) -> object:
        return min(values)


_REGISTRY: dict[str, AggregationFunction] = {
    aggregation.name: aggregation
    for aggregation in (
        SumAggregation(),
        MeanAggregation(),
        CountAggregation(),
        MaxAggregation(),
        MinAggregation(),
    )
}
BUILTIN_AGGREGATIONS = frozenset(_REGISTRY)


def register_aggregation(name: str, function: AggregationFunction) -> None:
    """Make a custom aggregation available by name.

    Registering a name that already exists replaces the previous aggregation,
    unless it is one of the built-ins.
    """
    if not callable(function):
        raise ValueError(f"Aggregation {name!r} must be callable")
    if name in BUILTIN_AGGREGATIONS:
        raise ValueError(f"Cannot replace the built-in aggregation {name!r}")
    if name in _REGISTRY:
        logger.debug("Replacing registered aggregation %s", name)
    _REGISTRY[name] = function


def unregister_aggregation(name: str) -> None:
    """Remove a custom aggregation registered with :func:`register_aggregation`."""
    if name in BUILTIN_AGGREGATIONS:
        raise ValueError(f"Cannot remove the built-in aggregation {name!r}")
    try:
        del _REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown aggregation {name!r}") from None


def get_aggregation(aggregation: str | AggregationFunction) -> AggregationFunction:
    """Resolve an aggregation name to the aggregation function.

    Callables are returned as they are, so that everywhere an
    aggregation is accepted, both a name or a function can be provided.
    """
    if callable(aggregation):
        return aggregation
    try:
        return _REGISTRY[aggregation]
    except KeyError:
        raise KeyError(
            f"Unknown aggregation {aggregation!r}, available: {sorted(_REGISTRY)}"
        ) from None


def available_aggregations() -> list[str]:
    """Names of all the registered aggregations."""
    return list(_REGISTRY)
