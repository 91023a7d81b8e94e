"""Format tabular data into a text table for print.

the `tabulate` function takes a :class:`datapivot.table.Table` and formats it into a text table.
It will truncate long strings and limit the number of rows to display.
The function is used to display the result of the ``datapivot-pivot`` command.

Example:

    >>> from datapivot.table import Table
    >>> table = Table.from_columns({
    ...     "Product": ["Videogame", "Laptop", "Laptop"],
    ...     "Quantity": ["8", "8", "7"],
    ...     "Price": ["66.50", "38.72", "77.46"],
    ... })
    >>> print(tabulate(table))
    Product   | Quantity | Price
    --------- | -------- | -----
    Videogame | 8        | 66.50
    Laptop    | 8        | 38.72
    Laptop    | 7        | 77.46
"""

from ..table import Table


def tabulate(table: Table, max_rows: int = 20) -> str:
    """Format a Table into a text table.

    Will produce a string like::

        Product   | Quantity | Price | Total
        --------- | -------- | ----- | ------
        Videogame | 8        | 66.50 | 532.00
        Laptop    | 8        | 38.72 | 309.76
        Laptop    | 7        | 77.46 | 542.22
    """
    cols = table.column_names
    rows = [
        [format_value(table.get_cell(c, idx)) for c in cols]
        for idx in range(min(table.row_count, max_rows))
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    text = "\n".join(header + separator + textrows)
    if table.row_count > max_rows:
        text += f"\n... and {table.row_count - max_rows} more rows"
    return text


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    )


def format_value(v: str) -> str:
    """Format a cell to be printed in the table.

    Surrounding whitespace is stripped and long strings are truncated.
    """
    v = v.strip()
    if len(v) > 30:
        v = v[:27] + "..."
    return v
