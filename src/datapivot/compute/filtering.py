"""Query plan nodes that implement filtering of rows.

A common request in queries is to filter the data to
pick only the rows that respect a specific filter.
An example is the ``WHERE`` condition in SQL queries.

This module implements the basic filtering capabilities.
"""

import logging

from ..table import Table
from ..utils.inspect import get_qualname
from .base import QueryPlanNode, RowPredicate

logger = logging.getLogger(__name__)


def filter_rows(table: Table, predicate: RowPredicate) -> Table:
    """Keep only the rows for which ``predicate`` returns ``True``.

    The predicate receives each row as a read-only ``{column: cell}``
    mapping. All columns are preserved and accepted rows keep
    their relative order.

    >>> t = Table.from_columns({"values": ["1", "2", "3", "4", "5"]})
    >>> filter_rows(t, lambda row: int(row["values"]) > 3).get_column("values")
    ['4', '5']
    """
    result = Table()
    for name in table.column_names:
        result.add_column(name)

    for row in table.rows():
        if predicate(row):
            result.add_row(row)

    logger.debug("Filter kept %d of %d rows", result.row_count, table.row_count)
    return result


class FilterNode(QueryPlanNode):
    """Filter data based on a predicate function.

    The filter expects a function that when applied
    to a row of the data being filtered returns ``True``
    or ``False`` to mark if the row has to be preserved
    or has to be discarded.

    >>> data = Table.from_columns({"values": ["1", "2", "3", "4", "5"]})
    >>> from datapivot.compute import TableDataSource
    >>> FilterNode(lambda row: row["values"] > "3", TableDataSource(data)).execute().get_column("values")
    ['4', '5']
    """

    def __init__(self, predicate: RowPredicate, child: QueryPlanNode) -> None:
        """
        :param predicate: The function deciding which rows to keep.
        :param child: The node emitting the data to be filtered.
        """
        self.predicate = predicate
        self.child = child

    def __str__(self) -> str:
        return f"FilterNode(filter={get_qualname(self.predicate)}, child={self.child})"

    def execute(self) -> Table:
        """Apply the filtering to the data of the child node."""
        return filter_rows(self.child.execute(), self.predicate)
