"""Query plan nodes that perform sorting of data.

When computing ranks or looking for most significant
values, it's often necessary to sort the data based
on one or more columns.

As cells are text, sorting compares them as numbers
when both cells being compared are numbers and falls back
to comparing them as strings otherwise. So ``"9"`` comes
before ``"10"``, but ``"apple"`` comes before ``"banana"``.

This module implements the sorting capabilities.
"""

import functools
import logging
from typing import Iterable

from ..table import Table
from ..utils.numbers import compare_cells
from .base import QueryPlanNode

logger = logging.getLogger(__name__)


def sort_by(table: Table, keys: Iterable[tuple[str, bool]]) -> Table:
    """Sort the rows of a table by one or more columns.

    ``keys`` is a list of ``(column, descending)`` pairs,
    the first pair has precedence over the following ones.
    Columns that don't exist in the table are ignored.

    The sorting is stable, rows that compare equal on all keys
    preserve their original order.

    >>> t = Table.from_columns({"name": ["a", "b", "c", "d"], "n": ["10", "9", "10", "1"]})
    >>> sort_by(t, [("n", True)]).get_column("name")
    ['a', 'c', 'b', 'd']
    """
    sorting = [(name, desc) for name, desc in keys if table.has_column(name)]

    def compare_rows(a: int, b: int) -> int:
        for name, descending in sorting:
            cmp = compare_cells(table.get_cell(name, a), table.get_cell(name, b))
            if cmp != 0:
                return -cmp if descending else cmp
        return 0  # All keys are equal

    # list.sort is stable, equal rows keep their original order.
    indices = list(range(table.row_count))
    indices.sort(key=functools.cmp_to_key(compare_rows))

    result = Table()
    for name in table.column_names:
        result.add_column(name, [table.get_cell(name, idx) for idx in indices])
    result.pad_rows(table.row_count)
    logger.debug("Sorted %d rows by %s", table.row_count, sorting)
    return result


class SortNode(QueryPlanNode):
    """Sort data in-memory based on one or more columns.

    The node expects a list of columns and a list of
    sort directions. The data will be sorted based on
    the columns in the order they are provided.

    The sort directions are used to specify if the
    sorting should be ascending or descending.

    >>> from datapivot.compute import TableDataSource
    >>> data = Table.from_columns({"values": ["1", "2", "3", "4", "5"]})
    >>> # Sort the data in descending order
    >>> sort = SortNode(["values"], [True], TableDataSource(data))
    >>> sort.execute().get_column("values")
    ['5', '4', '3', '2', '1']
    """

    def __init__(
        self, keys: list[str], descending: list[bool], child: QueryPlanNode
    ) -> None:
        """
        :param keys: The columns to sort by in the order they should be sorted.
        :param descending: If each columns should be sorted in a descending order.
        :param child: The node emitting the data to be sorted.
        """
        if len(keys) != len(descending):
            raise ValueError("Keys and descending must have the same length")

        self.sorting = list(zip(keys, descending))
        self.child = child

    def __str__(self) -> str:
        sorting = [(k, "descending" if d else "ascending") for k, d in self.sorting]
        return f"SortNode(sorting={sorting}, {self.child})"

    def execute(self) -> Table:
        """Sort the data of the child node."""
        return sort_by(self.child.execute(), self.sorting)
