"""The DataPivot Compute Engine

The compute engine implements the operations that can be
performed on a :class:`datapivot.table.Table`: filtering,
projections, grouping and aggregation, sorting, reshaping
between wide and long format, joins and pivot tables.

Each operation is available as a plain function, that takes one
or two tables and returns a new table, and as a query plan node.
The nodes allow to combine multiple operations in a query plan
that is executed only when required::

    (Table)-->Node1--(Table)-->Node2--(Table)-->...

The query plan nodes themselves are in charge of their execution,
this keeps the behavior near to the node and thus makes easy to
know how a Node is actually executed without having to look around too much.

Building a query plan requires to combine the nodes that we want
to be executed starting with one or more ``DataSource`` nodes as the
leafs node of a query:

>>> from datapivot.table import Table
>>> data = Table.from_columns({
...    "animals": ["Flamingo", "Horse", "Brittle stars", "Centipede"],
...    "n_legs": ["2", "4", "5", "100"],
... })
>>>
>>> from datapivot.compute import FilterNode, SortNode, TableDataSource
>>> # SELECT * FROM data WHERE n_legs >= 5 ORDER BY n_legs DESC
>>> query = SortNode(["n_legs"], [True], FilterNode(
...     lambda row: float(row["n_legs"]) >= 5,
...     TableDataSource(data)
... ))
>>> query.execute().get_column("animals")
['Centipede', 'Brittle stars']
"""

from .aggregate import AggregateNode, group_by, group_row_indices
from .aggregations import (
    Aggregation,
    AggregationFunction,
    CountAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    SumAggregation,
    available_aggregations,
    get_aggregation,
    register_aggregation,
    unregister_aggregation,
)
from .base import QueryPlanNode
from .datasources import (
    CSVDataSource,
    JSONDataSource,
    ParquetDataSource,
    TableDataSource,
)
from .filtering import FilterNode, filter_rows
from .join import JoinKind, JoinNode, join
from .pivot import PivotNode, PivotTable, pivot
from .reshape import CastNode, MeltNode, cast, melt
from .selection import (
    ComputeColumnNode,
    ProjectNode,
    RenameNode,
    TransformNode,
    add_computed_column,
    rename,
    select,
    transform,
)
from .sinks import write_csv, write_json, write_parquet
from .sorting import SortNode, sort_by

__all__ = (
    "QueryPlanNode",
    "CSVDataSource",
    "JSONDataSource",
    "ParquetDataSource",
    "TableDataSource",
    "write_csv",
    "write_json",
    "write_parquet",
    "FilterNode",
    "filter_rows",
    "ProjectNode",
    "RenameNode",
    "ComputeColumnNode",
    "TransformNode",
    "select",
    "rename",
    "add_computed_column",
    "transform",
    "AggregateNode",
    "group_by",
    "group_row_indices",
    "Aggregation",
    "AggregationFunction",
    "CountAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "MinAggregation",
    "SumAggregation",
    "available_aggregations",
    "get_aggregation",
    "register_aggregation",
    "unregister_aggregation",
    "SortNode",
    "sort_by",
    "MeltNode",
    "CastNode",
    "melt",
    "cast",
    "JoinKind",
    "JoinNode",
    "join",
    "PivotNode",
    "PivotTable",
    "pivot",
)
