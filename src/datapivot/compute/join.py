"""Query plan nodes that implement join operations.

The join operations are implemented as hash joins:
an index of the rows is built for the right table
grouping them by their join key, then for each row of the left table
the index is probed to find the matching rows.

Four kinds of join are supported:

* **inner** only the rows that have a match on both sides.
* **left** all the rows of the left table, with empty cells
  where there was no match on the right side.
* **right** all the rows of the right table, with empty cells
  where there was no match on the left side.
* **full** all the rows of both tables.

>>> from datapivot.table import Table
>>> left = Table.from_columns({"id": ["1", "2", "3"], "name": ["Alice", "Bob", "Charlie"]})
>>> right = Table.from_columns({"id": ["3", "2"], "age": ["25", "30"]})
>>> joined = join(left, right, ["id"])
>>> joined.column_names
['id', 'name', 'age']
>>> joined.get_column("name"), joined.get_column("age")
(['Bob', 'Charlie'], ['30', '25'])
"""

import enum
import logging

from ..table import Table
from .aggregate import group_row_indices, row_key
from .base import QueryPlanNode

logger = logging.getLogger(__name__)


class JoinKind(enum.StrEnum):
    """The kinds of join supported by :func:`join`."""

    INNER = "inner"
    LEFT = "left"
    RIGHT = "right"
    FULL = "full"


def join(
    left: Table, right: Table, by: list[str], kind: JoinKind | str = JoinKind.INNER
) -> Table:
    """Join two tables on the columns listed in ``by``.

    The result has all the columns of the left table, followed
    by the columns of the right table that are not join keys.
    A right column with the same name of a left column is
    renamed adding a ``_right`` suffix, repeated until the name
    is not used by any other column.

    When a left row matches multiple right rows, one row is emitted
    for each of the matches. Rows without a match are emitted
    depending on the kind of join, with empty cells for the
    columns of the side that had no match.

    >>> left = Table.from_columns({"id": ["1", "2"], "name": ["Alice", "Bob"]})
    >>> right = Table.from_columns({"id": ["2", "4"], "age": ["30", "40"]})
    >>> full = join(left, right, ["id"], "full")
    >>> full.get_column("id"), full.get_column("name"), full.get_column("age")
    (['1', '2', '4'], ['Alice', 'Bob', ''], ['', '30', '40'])
    """
    try:
        kind = JoinKind(kind)
    except ValueError:
        raise ValueError(
            f"Unsupported join kind {kind!r}, expected one of {[k.value for k in JoinKind]}"
        ) from None

    left_columns = left.column_names
    # Map each right column to its name in the result.
    right_columns: dict[str, str] = {}
    used_names = set(left_columns) | {n for n in right.column_names if n not in by}
    for name in right.column_names:
        if name in by:
            continue
        output_name = name
        if name in left_columns:
            output_name = name + "_right"
            while output_name in used_names:
                output_name += "_right"
            used_names.add(output_name)
        right_columns[name] = output_name

    result = Table()
    for name in left_columns + list(right_columns.values()):
        result.add_column(name)

    right_index = group_row_indices(right, by)
    matched_keys: set[tuple[str, ...]] = set()

    for lidx in range(left.row_count):
        key = row_key(left, by, lidx)
        left_row = [(name, left.get_cell(name, lidx)) for name in left_columns]
        matches = right_index.get(key)
        if matches:
            matched_keys.add(key)
            for ridx in matches:
                result.add_row(
                    left_row
                    + [
                        (output, right.get_cell(name, ridx))
                        for name, output in right_columns.items()
                    ]
                )
        elif kind in (JoinKind.LEFT, JoinKind.FULL):
            result.add_row(
                left_row + [(output, "") for output in right_columns.values()]
            )

    if kind in (JoinKind.RIGHT, JoinKind.FULL):
        for key, indices in right_index.items():
            if key in matched_keys:
                continue
            key_cells = dict(zip(by, key))
            left_row = [(name, key_cells.get(name, "")) for name in left_columns]
            for ridx in indices:
                result.add_row(
                    left_row
                    + [
                        (output, right.get_cell(name, ridx))
                        for name, output in right_columns.items()
                    ]
                )

    logger.debug(
        "%s join of %d and %d rows produced %d rows",
        kind.value,
        left.row_count,
        right.row_count,
        result.row_count,
    )
    return result


class JoinNode(QueryPlanNode):
    """Join the data of two child nodes.

    See :func:`join` for the details of how rows are matched.

    >>> from datapivot.compute import TableDataSource
    >>> left = TableDataSource(Table.from_columns({"id": ["1", "2"], "name": ["Alice", "Bob"]}))
    >>> right = TableDataSource(Table.from_columns({"id": ["2"], "age": ["30"]}))
    >>> JoinNode(["id"], "left", left, right).execute().get_column("age")
    ['', '30']
    """

    def __init__(
        self,
        by: list[str],
        kind: JoinKind | str,
        left_child: QueryPlanNode,
        right_child: QueryPlanNode,
    ) -> None:
        """
        :param by: The columns to join on, they must exist in both tables.
        :param kind: The kind of join, one of ``inner``, ``left``, ``right``, ``full``.
        :param left_child: The left source of data to join.
        :param right_child: The right source of data to join.
        """
        try:
            self.kind = JoinKind(kind)
        except ValueError:
            raise ValueError(f"Unsupported join kind {kind!r}") from None
        self.by = by
        self.left_child = left_child
        self.right_child = right_child

    def __str__(self) -> str:
        return f"JoinNode(by={self.by}, kind={self.kind.value}, left={self.left_child}, right={self.right_child})"

    def execute(self) -> Table:
        """Perform the join operation.

        Both children are executed and kept in memory,
        so it is not suitable for large datasets.
        """
        return join(
            self.left_child.execute(), self.right_child.execute(), self.by, self.kind
        )
