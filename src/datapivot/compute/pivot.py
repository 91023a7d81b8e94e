"""Pivot tables, cross tabulation of a value by two fields.

A pivot table summarises a dataset by taking the distinct values
of a field as rows, the distinct values of another field as columns,
and aggregating a third field for each combination of the two.

For example, given the following data::

    Region, Product, Sales
    North,  Apples,  100
    South,  Apples,  150
    North,  Bananas, 300
    North,  Bananas, 50

Pivoting by ``Region`` and ``Product`` summing ``Sales`` leads to::

    Region, Apples, Bananas
    North,  100.0,  350.0
    South,  150.0,

Rows and columns appear in the order their values are first
found in the data, combinations that never happen are empty.
"""

import logging
from dataclasses import dataclass, field

from ..table import DuplicateColumnError, Table
from ..utils.inspect import get_qualname
from .aggregations import AggregationFunction, get_aggregation
from .base import QueryPlanNode

logger = logging.getLogger(__name__)


@dataclass
class PivotTable:
    """The result of :func:`pivot`.

    ``values`` contains ``{row_label: {column_label: cell}}``
    only for the combinations of labels that exist in the data.
    """

    row_field: str
    column_field: str
    value_field: str
    aggregation: AggregationFunction
    row_labels: list[str] = field(default_factory=list)
    column_labels: list[str] = field(default_factory=list)
    values: dict[str, dict[str, str]] = field(default_factory=dict)

    def get(self, row_label: str, column_label: str) -> str:
        """The aggregated cell for a combination of labels, empty if there is none."""
        return self.values.get(row_label, {}).get(column_label, "")

    def to_table(self) -> Table:
        """Convert the pivot table back to a :class:`datapivot.table.Table`.

        The first column is named after the ``row_field`` and
        contains the row labels, then one column for each column label follows.

        Raises :class:`datapivot.table.DuplicateColumnError` when a column label
        is the same as the ``row_field`` or as another column label.
        """
        names = [self.row_field] + self.column_labels
        if len(set(names)) != len(names):
            raise DuplicateColumnError(
                f"Pivot table would lead to duplicate columns: {names}"
            )

        result = Table()
        result.add_column(self.row_field)
        for label in self.column_labels:
            result.add_column(label)

        for row_label in self.row_labels:
            result.add_row(
                [(self.row_field, row_label)]
                + [(label, self.get(row_label, label)) for label in self.column_labels]
            )
        return result

    def __str__(self) -> str:
        return str(self.to_table())


def pivot(
    table: Table,
    row_field: str,
    column_field: str,
    value_field: str,
    aggregation: str | AggregationFunction = "sum",
) -> PivotTable:
    """Cross tabulate ``value_field`` by ``row_field`` and ``column_field``.

    All the cells of ``value_field`` that share the same row and column
    labels are reduced to one cell through ``aggregation``,
    which can be the name of a registered aggregation or any function.

    If any of the fields doesn't exist in the table,
    an empty pivot table is returned.

    >>> t = Table.from_columns({
    ...     "Region": ["North", "South", "North", "North"],
    ...     "Product": ["Apples", "Apples", "Bananas", "Bananas"],
    ...     "Sales": ["100", "150", "300", "50"],
    ... })
    >>> pt = pivot(t, "Region", "Product", "Sales", "sum")
    >>> pt.row_labels, pt.column_labels
    (['North', 'South'], ['Apples', 'Bananas'])
    >>> pt.get("North", "Bananas"), pt.get("South", "Bananas")
    ('350.0', '')
    """
    aggregation = get_aggregation(aggregation)
    result = PivotTable(row_field, column_field, value_field, aggregation)

    missing = [
        name
        for name in (row_field, column_field, value_field)
        if not table.has_column(name)
    ]
    if missing:
        logger.debug("Cannot pivot, missing fields %s", missing)
        return result

    # Grouping values by (row label, column label) in a single pass,
    # dicts keep the labels in the order they were first found.
    cells: dict[tuple[str, str], list[str]] = {}
    row_labels: dict[str, None] = {}
    column_labels: dict[str, None] = {}
    for index in range(table.row_count):
        row_label = table.get_cell(row_field, index)
        column_label = table.get_cell(column_field, index)
        row_labels.setdefault(row_label)
        column_labels.setdefault(column_label)
        cells.setdefault((row_label, column_label), []).append(
            table.get_cell(value_field, index)
        )

    result.row_labels = list(row_labels)
    result.column_labels = list(column_labels)
    for (row_label, column_label), values in cells.items():
        result.values.setdefault(row_label, {})[column_label] = aggregation(values)
    return result


class PivotNode(QueryPlanNode):
    """Pivot the data of the child node.

    The resulting pivot table is emitted as a :class:`datapivot.table.Table`
    through :meth:`PivotTable.to_table`.

    >>> from datapivot.compute import TableDataSource
    >>> data = Table.from_columns({"r": ["a", "b"], "c": ["x", "x"], "v": ["1", "2"]})
    >>> PivotNode("r", "c", "v", "count", TableDataSource(data)).execute().column_names
    ['r', 'x']
    """

    def __init__(
        self,
        row_field: str,
        column_field: str,
        value_field: str,
        aggregation: str | AggregationFunction,
        child: QueryPlanNode,
    ) -> None:
        """
        :param row_field: The field whose values become the rows.
        :param column_field: The field whose values become the columns.
        :param value_field: The field to aggregate.
        :param aggregation: The aggregation name or function.
        :param child: The node emitting the data to pivot.
        """
        self.row_field = row_field
        self.column_field = column_field
        self.value_field = value_field
        self.aggregation = aggregation
        self.child = child

    def __str__(self) -> str:
        aggregation = self.aggregation
        if not isinstance(aggregation, str):
            aggregation = get_qualname(aggregation)
        return (
            f"PivotNode(rows={self.row_field}, columns={self.column_field}, "
            f"values={self.value_field}, aggregation={aggregation}, {self.child})"
        )

    def execute(self) -> Table:
        return pivot(
            self.child.execute(),
            self.row_field,
            self.column_field,
            self.value_field,
            self.aggregation,
        ).to_table()
