"""Base classes and interfaces for Compute Engine

This module defines the base components that are
necessary to represent a query plan and execute it.
"""

import abc
from typing import Callable

from ..table import Row, Table

RowPredicate = Callable[[Row], bool]
"""Function receiving a row and telling if it has to be kept."""

RowComputation = Callable[[Row], str]
"""Function receiving a row and computing a new cell out of it."""

ColumnTransformation = Callable[[list[str]], list[str]]
"""Function receiving all cells of a column and returning the replacement cells."""


class QueryPlanNode(abc.ABC):
    """A node of a query execution plan.

    The Query plan is represented as a tree
    of nodes. Each node is a step in the execution
    and all previous steps are children of the
    last one.

    For example a simple plan might involve
    loading data and grouping it::

        CSVDataSource -> AggregateNode(keys, aggregations)

    That would be a plan where the last step
    is the aggregation, and the CSVDataSource is a child
    of the aggregate node.

    The number of children can be variable, some
    nodes like for example Joins, will accept two
    child nodes that have to be joined together.

    Each Node receives :class:`datapivot.table.Table`
    data from its children and emits a new
    :class:`datapivot.table.Table` as its output,
    the tables emitted by children are never modified.

    For example a simple node that takes data
    and just forwards it as is after printing
    its content can be implemented as::

        class DebugDataNode(QueryPlanNode):
            def __init__(self, child):
                self.child = child

            def execute(self):
                table = self.child.execute()
                print(table)
                return table

            def __str__(self):
                return f"DebugDataNode({self.child})"
    """

    @abc.abstractmethod
    def execute(self) -> Table:
        """Compute the table for the next node.

        Usually this happens by executing the child nodes,
        transforming their data somehow, and returning
        the result to the next consumer.
        """
        ...

    @abc.abstractmethod
    def __str__(self) -> str:
        """Human readable representation of the node."""
        ...
