"""Query plan nodes that compute aggregations.

Frequently when analysing data is necessary
to compute statistics like the min, max, average, etc...
of the data stored in datasets.

The aggregate node is in charge of computing
those aggregations and projecting them as new
columns in a query pipeline.

Typically the aggregate node will group the data
by a set of columns and then compute the aggregations

For example, given the following data::

    city, shop, n_employees
    New York, Shop A, 10
    New York, Shop B, 15
    Los Angeles, Shop C, 8
    Los Angeles, Shop D, 12
    New York, Shop E, 20

We could group by city and compute the sum of the employees
to get::

    city, total_employees
    New York, 45.0
    Los Angeles, 20.0

Groups are always emitted in the order their key was
first seen while scanning the rows, so ``New York`` comes
first because it's the city of the first row.
"""

import logging
from typing import Iterable

from ..table import DuplicateColumnError, Table
from ..utils.inspect import get_qualname
from .aggregations import AggregationFunction, get_aggregation
from .base import QueryPlanNode

__all__ = ("AggregateNode", "GroupKey", "group_by", "group_row_indices")

logger = logging.getLogger(__name__)

GroupKey = tuple[str, ...]
"""The values of the grouping columns for a row, one per column."""

AggregationSpec = tuple[str, str, str | AggregationFunction]
"""``(source_column, output_column, aggregation)``"""


def row_key(table: Table, columns: list[str], index: int) -> GroupKey:
    """The group key of a row, missing columns contribute an empty string."""
    return tuple(table.get_cell(name, index) for name in columns)


def group_row_indices(table: Table, columns: list[str]) -> dict[GroupKey, list[int]]:
    """Partition the rows of a table by the values of ``columns``.

    Returns the ``{key: [row indices]}`` of each group,
    with groups in the order their key was first found
    and indices in row order.

    >>> t = Table.from_columns({"city": ["Rome", "Milan", "Rome"]})
    >>> group_row_indices(t, ["city"])
    {('Rome',): [0, 2], ('Milan',): [1]}
    """
    groups: dict[GroupKey, list[int]] = {}
    for index in range(table.row_count):
        groups.setdefault(row_key(table, columns, index), []).append(index)
    return groups


def group_by(
    table: Table, keys: list[str], aggregations: Iterable[AggregationSpec]
) -> Table:
    """Group rows by ``keys`` and compute the aggregations for each group.

    Each aggregation is a ``(source_column, output_column, aggregation)``
    triple where aggregation is a registered aggregation name or
    any function reducing a list of cells to one cell.

    The result has one row for each group with the key columns
    followed by one column for each aggregation.
    When the source column doesn't exist, the aggregation
    result is an empty string.

    Output names must differ from the keys and from each other,
    otherwise :class:`datapivot.table.DuplicateColumnError` is raised.

    >>> t = Table.from_columns({
    ...    "city": ["New York", "New York", "Los Angeles", "Los Angeles", "New York"],
    ...    "n_employees": ["10", "15", "8", "12", "20"],
    ... })
    >>> result = group_by(t, ["city"], [("n_employees", "total_employees", "sum")])
    >>> result.get_column("city"), result.get_column("total_employees")
    (['New York', 'Los Angeles'], ['45.0', '20.0'])
    """
    aggregations = [
        (source, output, get_aggregation(aggregation))
        for source, output, aggregation in aggregations
    ]
    output_columns = list(keys) + [output for _, output, _ in aggregations]
    if len(set(output_columns)) != len(output_columns):
        raise DuplicateColumnError(
            f"Grouping would lead to duplicate columns: {output_columns}"
        )

    result = Table()
    for name in output_columns:
        result.add_column(name)

    groups = group_row_indices(table, keys)
    for key, indices in groups.items():
        row = list(zip(keys, key))
        for source, output, aggregation in aggregations:
            if table.has_column(source):
                values = [table.get_cell(source, idx) for idx in indices]
                row.append((output, aggregation(values)))
            else:
                row.append((output, ""))
        result.add_row(row)

    logger.debug("Grouped %d rows into %d groups", table.row_count, len(groups))
    return result


class AggregateNode(QueryPlanNode):
    """Group data and compute aggregations.

    >>> from datapivot.compute import TableDataSource, SumAggregation
    >>> data = Table.from_columns({
    ...    'city': ['New York', 'New York', 'Los Angeles', 'Los Angeles', 'New York'],
    ...    'shop': ['Shop A', 'Shop B', 'Shop C', 'Shop D', 'Shop E'],
    ...    'n_employees': ['10', '15', '8', '12', '20']
    ... })
    >>> aggregate = AggregateNode(["city"], [("n_employees", "total_employees", SumAggregation())], TableDataSource(data))
    >>> aggregate.execute().get_column("total_employees")
    ['45.0', '20.0']
    """

    def __init__(
        self,
        keys: list[str],
        aggregations: list[AggregationSpec],
        child: QueryPlanNode,
    ) -> None:
        """
        :param keys: The columns to group by.
        :param aggregations: The aggregations to compute in the form of
                             ``[(source_column, new_column_name, aggregation)]``.
        :param child: The child node that will provide the data to aggregate.
        """
        self.keys = keys
        self.aggregations = aggregations
        self.child = child

    def __str__(self) -> str:
        aggregations = [
            (source, output, aggr if isinstance(aggr, str) else get_qualname(aggr))
            for source, output, aggr in self.aggregations
        ]
        return f"AggregateNode(keys={self.keys}, aggregations={aggregations}, {self.child})"

    def execute(self) -> Table:
        """Group the data of the child node and compute the aggregations."""
        return group_by(self.child.execute(), self.keys, self.aggregations)
