"""Query plan nodes that reshape data between wide and long format.

Data in *wide* format has one row per entity with one column
for each variable measured::

    Region, Sales, Units
    North,  100,   10
    South,  150,   15

The same data in *long* format has one row per
``(entity, variable, value)`` triple::

    Region, variable, value
    North,  Sales,    100
    North,  Units,    10
    South,  Sales,    150
    South,  Units,    15

:func:`melt` converts from wide to long format,
:func:`cast` converts back from long to wide format.
"""

import logging

from ..table import DuplicateColumnError, Table
from .aggregate import group_row_indices
from .base import QueryPlanNode

logger = logging.getLogger(__name__)


def melt(
    table: Table,
    id_vars: list[str],
    value_vars: list[str],
    var_name: str = "variable",
    value_name: str = "value",
) -> Table:
    """Convert a table from wide to long format.

    Each row of the table becomes ``len(value_vars)`` rows,
    one for each of the ``value_vars`` in the order they are provided.
    Each of them carries the ``id_vars`` of the row, the name of the
    variable in ``var_name`` column and its cell in ``value_name`` column.

    >>> t = Table.from_columns({"Region": ["North", "South"], "Sales": ["100", "150"], "Units": ["10", "15"]})
    >>> long = melt(t, ["Region"], ["Sales", "Units"])
    >>> long.column_names
    ['Region', 'variable', 'value']
    >>> long.get_column("variable")
    ['Sales', 'Units', 'Sales', 'Units']
    """
    output_columns = list(id_vars) + [var_name, value_name]
    if len(set(output_columns)) != len(output_columns):
        raise DuplicateColumnError(
            f"Melting would lead to duplicate columns: {output_columns}"
        )

    result = Table()
    for name in output_columns:
        result.add_column(name)

    for index in range(table.row_count):
        ids = [(name, table.get_cell(name, index)) for name in id_vars]
        for variable in value_vars:
            result.add_row(
                ids
                + [(var_name, variable), (value_name, table.get_cell(variable, index))]
            )

    logger.debug(
        "Melted %d rows and %d variables into %d rows",
        table.row_count,
        len(value_vars),
        result.row_count,
    )
    return result


def cast(table: Table, id_vars: list[str], var_column: str, value_column: str) -> Table:
    """Convert a table from long to wide format.

    Every distinct value of ``var_column`` becomes a new column,
    in the order they are first found, and one row is emitted for
    every distinct combination of ``id_vars``.

    Cells for variables that a group doesn't have are empty,
    if a group has the same variable more than once the last one wins.

    >>> t = Table.from_columns({
    ...     "Region": ["North", "North", "South"],
    ...     "variable": ["Sales", "Units", "Sales"],
    ...     "value": ["100", "10", "150"],
    ... })
    >>> wide = cast(t, ["Region"], "variable", "value")
    >>> wide.column_names
    ['Region', 'Sales', 'Units']
    >>> wide.get_column("Units")
    ['10', '']
    """
    variables: dict[str, None] = {}
    if table.has_column(var_column):
        variables = dict.fromkeys(table.get_column(var_column))

    clashing = [name for name in id_vars if name in variables]
    if clashing or len(set(id_vars)) != len(id_vars):
        raise DuplicateColumnError(
            f"Casting would lead to duplicate columns: {clashing or list(id_vars)}"
        )

    result = Table()
    for name in list(id_vars) + list(variables):
        result.add_column(name)

    groups = group_row_indices(table, id_vars)
    for key, indices in groups.items():
        cells = dict.fromkeys(variables, "")
        if variables:
            for idx in indices:
                variable = table.get_cell(var_column, idx)
                cells[variable] = table.get_cell(value_column, idx)
        result.add_row(list(zip(id_vars, key)) + list(cells.items()))

    logger.debug(
        "Cast %d rows into %d rows and %d variables",
        table.row_count,
        len(groups),
        len(variables),
    )
    return result


class MeltNode(QueryPlanNode):
    """Convert the data of the child node from wide to long format.

    See :func:`melt` for details.
    """

    def __init__(
        self,
        id_vars: list[str],
        value_vars: list[str],
        child: QueryPlanNode,
        var_name: str = "variable",
        value_name: str = "value",
    ) -> None:
        """
        :param id_vars: The columns identifying each entity.
        :param value_vars: The columns to turn into variables.
        :param child: The node emitting the data in wide format.
        :param var_name: The name of the column holding the variable names.
        :param value_name: The name of the column holding the values.
        """
        self.id_vars = id_vars
        self.value_vars = value_vars
        self.var_name = var_name
        self.value_name = value_name
        self.child = child

    def __str__(self) -> str:
        return (
            f"MeltNode(id_vars={self.id_vars}, value_vars={self.value_vars}, "
            f"var_name={self.var_name}, value_name={self.value_name}, {self.child})"
        )

    def execute(self) -> Table:
        return melt(
            self.child.execute(),
            self.id_vars,
            self.value_vars,
            var_name=self.var_name,
            value_name=self.value_name,
        )


class CastNode(QueryPlanNode):
    """Convert the data of the child node from long to wide format.

    See :func:`cast` for details.
    """

    def __init__(
        self,
        id_vars: list[str],
        var_column: str,
        value_column: str,
        child: QueryPlanNode,
    ) -> None:
        """
        :param id_vars: The columns identifying each entity.
        :param var_column: The column whose values become new columns.
        :param value_column: The column providing the cells of the new columns.
        :param child: The node emitting the data in long format.
        """
        self.id_vars = id_vars
        self.var_column = var_column
        self.value_column = value_column
        self.child = child

    def __str__(self) -> str:
        return (
            f"CastNode(id_vars={self.id_vars}, var_column={self.var_column}, "
            f"value_column={self.value_column}, {self.child})"
        )

    def execute(self) -> Table:
        return cast(
            self.child.execute(), self.id_vars, self.var_column, self.value_column
        )
