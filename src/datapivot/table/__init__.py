"""In-memory storage for tabular data.

A :class:`Table` stores rectangular data as named columns of text cells.
Every other component of DataPivot consumes tables and produces new tables.

Cells are always text, there is no schema: interpreting
a cell as a number is something each operation does on its own
when it needs to, and falls back to text when it can't.

Tables are grown by adding columns or rows::

    >>> from datapivot.table import Table
    >>> t = Table()
    >>> t.add_column("Region", ["North", "South"])
    >>> t.add_column("Sales", ["100", "150"])
    >>> t.add_row([("Region", "East"), ("Sales", "200")])
    >>> t
    Table(columns=['Region', 'Sales'], rows=3)
"""

from .table import ColumnNotFoundError, DuplicateColumnError, Row, Table

__all__ = ("Table", "Row", "ColumnNotFoundError", "DuplicateColumnError")
