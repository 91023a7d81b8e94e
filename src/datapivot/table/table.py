"""The Table storage itself."""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Self

import pyarrow as pa

Row = Mapping[str, str]
"""A read-only snapshot of one row of a table, as column name -> cell."""


class ColumnNotFoundError(KeyError):
    """Raised when accessing a column that doesn't exist in a table."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Column not found: {self.name!r}"


class DuplicateColumnError(ValueError):
    """Raised when an operation would produce two columns with the same name."""

    pass


class Table:
    """Rectangular data stored as named columns of text cells.

    Columns are kept in insertion order and all of them are
    conceptually ``row_count`` long. Storage is allowed to
    be shorter than that, missing cells read as empty strings.

    >>> t = Table()
    >>> t.add_column("city", ["Rome", "Milan"])
    >>> t.add_row({"city": "Turin", "shops": "3"})
    >>> t.row_count
    3
    >>> t.get_column("shops")
    ['', '', '3']
    >>> t.get_cell("city", 10)
    ''
    """

    def __init__(self) -> None:
        self._columns: dict[str, list[str]] = {}
        self._row_count = 0

    @classmethod
    def from_columns(cls, columns: Mapping[str, Iterable[str]]) -> Self:
        """Build a table out of a ``{name: cells}`` mapping."""
        table = cls()
        for name, values in columns.items():
            table.add_column(name, values)
        return table

    @classmethod
    def from_arrow(cls, data: pa.Table | pa.RecordBatch) -> Self:
        """Build a table out of a :class:`pyarrow.Table` or :class:`pyarrow.RecordBatch`.

        All values are converted to their text representation,
        nulls become empty strings.
        """
        table = cls()
        for name in data.column_names:
            column = data.column(name)
            if not pa.types.is_string(column.type):
                column = column.cast(pa.string())
            table.add_column(
                name, ["" if v is None else v for v in column.to_pylist()]
            )
        return table

    @property
    def row_count(self) -> int:
        """Number of rows in the table."""
        return self._row_count

    @property
    def column_count(self) -> int:
        """Number of columns in the table."""
        return len(self._columns)

    @property
    def column_names(self) -> list[str]:
        """Names of the columns in insertion order."""
        return list(self._columns)

    def has_column(self, name: str) -> bool:
        return name in self._columns

    __contains__ = has_column

    def add_column(self, name: str, values: Iterable[str] = ()) -> None:
        """Append a column, or replace an existing one with the same name.

        A column shorter than the table is padded with empty strings,
        a longer one extends the table row count.
        """
        column = list(values)
        if len(column) < self._row_count:
            column.extend([""] * (self._row_count - len(column)))
        self._columns[name] = column
        self._row_count = max(self._row_count, len(column))

    def add_row(self, cells: Mapping[str, str] | Iterable[tuple[str, str]]) -> None:
        """Append one row to the table.

        ``cells`` can be a mapping or a sequence of ``(column, value)`` pairs.
        Columns that don't exist yet are created, columns that
        are not mentioned read as empty strings for the new row.
        """
        if isinstance(cells, Mapping):
            cells = cells.items()

        index = self._row_count
        for name, value in cells:
            if name not in self._columns:
                self.add_column(name)
            column = self._columns[name]
            if len(column) <= index:
                column.extend([""] * (index + 1 - len(column)))
            column[index] = value
        self._row_count += 1

    def pad_rows(self, row_count: int) -> None:
        """Grow the table to at least ``row_count`` rows.

        The new cells of every column read as empty strings.
        Tables never shrink, so a smaller count does nothing.
        """
        self._row_count = max(self._row_count, row_count)

    def get_column(self, name: str) -> list[str]:
        """Return a copy of the column cells, ``row_count`` long."""
        try:
            column = self._columns[name]
        except KeyError:
            raise ColumnNotFoundError(name) from None
        return column + [""] * (self._row_count - len(column))

    def get_cell(self, name: str, index: int) -> str:
        """Return a single cell, or an empty string if there is no such cell."""
        column = self._columns.get(name)
        if column is None or index < 0 or index >= len(column):
            return ""
        return column[index]

    def columns(self) -> Iterator[tuple[str, list[str]]]:
        """Iterate over ``(name, cells)`` in column order."""
        for name in self._columns:
            yield name, self.get_column(name)

    def row(self, index: int) -> Row:
        """Snapshot of a row as a read-only mapping."""
        return MappingProxyType(
            {name: self.get_cell(name, index) for name in self._columns}
        )

    def rows(self) -> Iterator[Row]:
        """Iterate over the rows of the table as read-only mappings."""
        for index in range(self._row_count):
            yield self.row(index)

    def copy(self) -> Self:
        """A new table with the same content that shares no storage."""
        table = self.__class__()
        table._columns = {name: list(column) for name, column in self._columns.items()}
        table._row_count = self._row_count
        return table

    def to_arrow(self) -> pa.Table:
        """Convert to a :class:`pyarrow.Table` where every column is a string column."""
        return pa.table(
            {
                name: pa.array(cells, type=pa.string())
                for name, cells in self.columns()
            }
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return (
            self.column_names == other.column_names
            and self._row_count == other._row_count
            and all(
                self.get_column(name) == other.get_column(name)
                for name in self._columns
            )
        )

    def __repr__(self) -> str:
        return f"Table(columns={self.column_names}, rows={self._row_count})"

    def __str__(self) -> str:
        lines = ["\t".join(self._columns)]
        for index in range(self._row_count):
            lines.append(
                "\t".join(self.get_cell(name, index) for name in self._columns)
            )
        return "\n".join(lines)
