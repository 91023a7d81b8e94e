"""The Dataframe object itself."""
from typing import Iterable, Self

import pyarrow as pa

from ..compute import (
  AggregateNode,
  CastNode,
  ComputeColumnNode,
  CSVDataSource,
  FilterNode,
  JoinNode,
  JSONDataSource,
  MeltNode,
  PivotNode,
  ProjectNode,
  RenameNode,
  SortNode,
  TableDataSource,
  TransformNode,
)
from ..compute.aggregations import AggregationFunction
from ..compute.base import (
  ColumnTransformation,
  QueryPlanNode,
  RowComputation,
  RowPredicate,
)
from ..table import Table


class Dataframe:
  """Data structure that handles data in rows and columns.

  The Dataframe object allows to represent in-memory data
  and perform transformations over it.

  The datapivot dataframe object is lazy, which means that
  any transformation or analysis will be applied only when the
  ``.collect()`` method will be invoked and no data is kept
  in memory until that moment (unless it already was).

  >>> df = Dataframe(Table.from_columns({
  ...   "Region": ["North", "South", "North"],
  ...   "Sales": ["100", "150", "300"],
  ... }))
  >>> df.group_by(["Region"], [("Sales", "Total", "sum")]).sort_by([("Total", True)]).to_table().get_column("Region")
  ['North', 'South']
  """
  def __init__(self, node_or_table: QueryPlanNode|Table|pa.Table) -> None:
    """
    :param node_or_table: A compute engine node expected to emit
                          the data for the dataframe, a :class:`datapivot.table.Table`
                          or a `pyarrow.Table`.
    """
    if isinstance(node_or_table, (Table, pa.Table)):
      node_or_table = TableDataSource(node_or_table)

    if not isinstance(node_or_table, QueryPlanNode):
      raise ValueError("Invalid input, expected a QueryPlanNode or a Table")

    self.node = node_or_table

  def __str__(self) -> str:
    return f"Dataframe({self.node})"

  @classmethod
  def open_csv(cls, filename: str, delimiter: str = ",") -> Self:
    """Open a CSV file and create a Dataframe out of its data.

    :param filename: The path to a local CSV file.
    :param delimiter: The character separating the cells.
    """
    return cls(CSVDataSource(filename, delimiter=delimiter))

  @classmethod
  def open_json(cls, filename: str) -> Self:
    """Open a JSON file and create a Dataframe out of its data.

    :param filename: The path to a local JSON file with an array of objects.
    """
    return cls(JSONDataSource(filename))

  def filter(self, predicate: RowPredicate) -> Self:
    """Apply a filter to the data and return a new Dataframe.

    The returned dataframe will only contain the rows
    for which the predicate returns ``True``.

    :param predicate: Function receiving a row as a mapping.
    """
    return self.__class__(FilterNode(predicate, self.node))

  def select(self, columns: list[str]) -> Self:
    """Keep only the given columns, in the given order."""
    return self.__class__(ProjectNode(columns, self.node))

  def rename(self, mapping: dict[str, str]) -> Self:
    """Rename columns according to ``{old_name: new_name}``."""
    return self.__class__(RenameNode(mapping, self.node))

  def with_column(self, name: str, computation: RowComputation) -> Self:
    """Add a column computed for each row."""
    return self.__class__(ComputeColumnNode(name, computation, self.node))

  def transform(self, columns: list[str], transformation: ColumnTransformation) -> Self:
    """Replace the given columns with the result of transforming them."""
    return self.__class__(TransformNode(columns, transformation, self.node))

  def group_by(
    self, keys: list[str], aggregations: list[tuple[str, str, str|AggregationFunction]]
  ) -> Self:
    """Group by ``keys`` computing ``(source, output, aggregation)`` aggregations."""
    return self.__class__(AggregateNode(keys, aggregations, self.node))

  def sort_by(self, keys: Iterable[tuple[str, bool]]) -> Self:
    """Sort by ``(column, descending)`` keys."""
    keys = list(keys)
    return self.__class__(
      SortNode([k for k, _ in keys], [d for _, d in keys], self.node)
    )

  def melt(
    self,
    id_vars: list[str],
    value_vars: list[str],
    var_name: str = "variable",
    value_name: str = "value",
  ) -> Self:
    """Convert from wide to long format."""
    return self.__class__(
      MeltNode(id_vars, value_vars, self.node, var_name=var_name, value_name=value_name)
    )

  def cast(self, id_vars: list[str], var_column: str, value_column: str) -> Self:
    """Convert from long to wide format."""
    return self.__class__(CastNode(id_vars, var_column, value_column, self.node))

  def join(self, other: Self|Table, by: list[str], kind: str = "inner") -> Self:
    """Join with another dataframe or table on the ``by`` columns."""
    if not isinstance(other, Dataframe):
      other = self.__class__(other)
    return self.__class__(JoinNode(by, kind, self.node, other.node))

  def pivot(
    self,
    row_field: str,
    column_field: str,
    value_field: str,
    aggregation: str|AggregationFunction = "sum",
  ) -> Self:
    """Pivot the data, see :func:`datapivot.compute.pivot`."""
    return self.__class__(
      PivotNode(row_field, column_field, value_field, aggregation, self.node)
    )

  def collect(self) -> Self:
    """Collect all data of the dataframe in memory.

    Returns a new Dataframe that has all data from the
    previous dataframe eagerly loaded in memory.
    """
    return self.__class__(self.node.execute())

  def to_table(self) -> Table:
    """Collect all the data and return a :class:`datapivot.table.Table`"""
    return self.node.execute()

  def to_arrow(self) -> pa.Table:
    """Collect all the data and return a pyarrow.Table"""
    return self.node.execute().to_arrow()
