"""Query plan nodes that implement projection of columns.

A common request in queries is to select specific columns,
rename them, or project new columns computed out of the existing ones.
An example is the ``SELECT`` clause in SQL queries.

This module implements the basic projection capabilities.
"""

import logging
from typing import Iterable, Mapping

from ..table import DuplicateColumnError, Table
from ..utils.inspect import get_qualname
from .base import ColumnTransformation, QueryPlanNode, RowComputation

logger = logging.getLogger(__name__)


def select(table: Table, column_names: Iterable[str]) -> Table:
    """Keep only the requested columns, in the requested order.

    Columns that don't exist are skipped, the
    number of rows is preserved even if no column was found.

    >>> t = Table.from_columns({"a": ["1"], "b": ["2"], "c": ["3"]})
    >>> select(t, ["c", "missing", "a"]).column_names
    ['c', 'a']
    """
    result = Table()
    for name in column_names:
        if table.has_column(name):
            result.add_column(name, table.get_column(name))
        else:
            logger.debug("Skipping missing column %s", name)
    result.pad_rows(table.row_count)
    return result


def rename(
    table: Table, pairs: Mapping[str, str] | Iterable[tuple[str, str]]
) -> Table:
    """Rename columns according to ``(old_name, new_name)`` pairs.

    Renamed columns come first, in the order of the pairs,
    the others follow in their original order.
    Pairs referring to columns that don't exist are skipped.

    Renaming a column to the name of another column that is kept,
    or renaming two columns to the same name, raises
    :class:`datapivot.table.DuplicateColumnError`.

    >>> t = Table.from_columns({"Region": ["North"], "Sales": ["100"]})
    >>> rename(t, {"Sales": "Revenue"}).column_names
    ['Revenue', 'Region']
    """
    if isinstance(pairs, Mapping):
        pairs = pairs.items()
    renames = [(old, new) for old, new in pairs if table.has_column(old)]

    renamed = {old for old, _ in renames}
    kept = [name for name in table.column_names if name not in renamed]
    new_names = [new for _, new in renames] + kept
    if len(set(new_names)) != len(new_names):
        duplicates = sorted({n for n in new_names if new_names.count(n) > 1})
        raise DuplicateColumnError(
            f"Renaming would lead to duplicate columns: {duplicates}"
        )

    result = Table()
    for old, new in renames:
        result.add_column(new, table.get_column(old))
    for name in kept:
        result.add_column(name, table.get_column(name))
    result.pad_rows(table.row_count)
    return result


def add_computed_column(table: Table, name: str, computation: RowComputation) -> None:
    """Append to ``table`` a new column computed row by row.

    The computation receives each row as a read-only mapping
    and returns the cell of the new column for that row.

    This modifies the table in place.

    >>> t = Table.from_columns({"Sales": ["100", "150"], "Units": ["10", "30"]})
    >>> add_computed_column(t, "Price", lambda row: str(int(row["Sales"]) // int(row["Units"])))
    >>> t.get_column("Price")
    ['10', '5']
    """
    values = [computation(row) for row in table.rows()]
    table.add_column(name, values)


def transform(
    table: Table, column_names: Iterable[str], transformation: ColumnTransformation
) -> Table:
    """Replace the cells of the given columns with the result of ``transformation``.

    The transformation receives all the cells of a column at once
    and is applied independently to each of the named columns.
    Missing columns are skipped.

    >>> t = Table.from_columns({"name": ["ann", "bob"], "age": ["30", "40"]})
    >>> transform(t, ["name"], lambda cells: [c.upper() for c in cells]).get_column("name")
    ['ANN', 'BOB']
    """
    column_names = set(column_names)
    result = Table()
    for name, cells in table.columns():
        if name in column_names:
            cells = list(transformation(cells))
        result.add_column(name, cells)
    result.pad_rows(table.row_count)
    return result


class ProjectNode(QueryPlanNode):
    """Project data by selecting specific columns.

    >>> from datapivot.compute import TableDataSource
    >>> data = Table.from_columns({"a": ["1", "2", "3"], "b": ["4", "5", "6"]})
    >>> ProjectNode(["b"], TableDataSource(data)).execute().column_names
    ['b']
    """

    def __init__(self, select: list[str], child: QueryPlanNode) -> None:
        """
        :param select: The list of column names to select.
        :param child: The node emitting the data to be projected.
        """
        self.select = select
        self.child = child

    def __str__(self) -> str:
        return f"ProjectNode(select={self.select}, child={self.child})"

    def execute(self) -> Table:
        return select(self.child.execute(), self.select)


class RenameNode(QueryPlanNode):
    """Rename columns of the data emitted by the child node."""

    def __init__(self, mapping: dict[str, str], child: QueryPlanNode) -> None:
        """
        :param mapping: The ``{old_name: new_name}`` renames to apply.
        :param child: The node emitting the data to be renamed.
        """
        self.mapping = mapping
        self.child = child

    def __str__(self) -> str:
        return f"RenameNode(mapping={self.mapping}, child={self.child})"

    def execute(self) -> Table:
        return rename(self.child.execute(), self.mapping)


class ComputeColumnNode(QueryPlanNode):
    """Append a column computed row by row.

    Differently from :func:`add_computed_column` the data
    of the child node is left untouched, the column is added
    to a copy of it.
    """

    def __init__(
        self, name: str, computation: RowComputation, child: QueryPlanNode
    ) -> None:
        """
        :param name: The name of the new column.
        :param computation: The function computing the cell for each row.
        :param child: The node emitting the data to extend.
        """
        self.name = name
        self.computation = computation
        self.child = child

    def __str__(self) -> str:
        return f"ComputeColumnNode(name={self.name}, computation={get_qualname(self.computation)}, child={self.child})"

    def execute(self) -> Table:
        table = self.child.execute().copy()
        add_computed_column(table, self.name, self.computation)
        return table


class TransformNode(QueryPlanNode):
    """Replace the content of columns by transforming them as a whole."""

    def __init__(
        self,
        columns: list[str],
        transformation: ColumnTransformation,
        child: QueryPlanNode,
    ) -> None:
        """
        :param columns: The columns to transform.
        :param transformation: The function receiving and returning the column cells.
        :param child: The node emitting the data to transform.
        """
        self.columns = columns
        self.transformation = transformation
        self.child = child

    def __str__(self) -> str:
        return f"TransformNode(columns={self.columns}, transformation={get_qualname(self.transformation)}, child={self.child})"

    def execute(self) -> Table:
        return transform(self.child.execute(), self.columns, self.transformation)
