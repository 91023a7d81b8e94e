"""Save tables to files.

Sinks are the counterpart of :mod:`datapivot.compute.datasources`,
they take the :class:`datapivot.table.Table` emitted by a query plan
and write it somewhere.

CSV and Parquet files are written with every column as text,
so that loading them back leads to the same table.
JSON files instead try to restore the type of values,
numbers and booleans are written as JSON numbers and booleans.
"""

import json
import logging

import pyarrow as pa
import pyarrow.csv
import pyarrow.parquet

from ..table import Table
from ..utils.numbers import parse_number

logger = logging.getLogger(__name__)


def write_csv(table: Table, filename: str, delimiter: str = ",") -> None:
    """Save the table to a CSV file with a header row."""
    pa.csv.write_csv(
        table.to_arrow(),
        filename,
        write_options=pa.csv.WriteOptions(delimiter=delimiter),
    )
    logger.debug("Wrote %d rows to %s", table.row_count, filename)


def write_parquet(table: Table, filename: str) -> None:
    """Save the table to a Parquet file."""
    pa.parquet.write_table(table.to_arrow(), filename)
    logger.debug("Wrote %d rows to %s", table.row_count, filename)


def write_json(table: Table, filename: str, pretty: bool = True) -> None:
    """Save the table to a JSON file as an array of objects.

    :param pretty: Indent the JSON to make it human readable.
    """
    records = [
        {name: cell_to_json(cell) for name, cell in row.items()}
        for row in table.rows()
    ]
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2 if pretty else None)
    logger.debug("Wrote %d rows to %s", table.row_count, filename)


def cell_to_json(cell: str) -> object:
    """Convert a cell to the most appropriate JSON value.

    >>> cell_to_json("10"), cell_to_json("1.5"), cell_to_json("True"), cell_to_json("abc")
    (10, 1.5, True, 'abc')
    """
    try:
        return int(cell)
    except ValueError:
        pass
    number = parse_number(cell)
    if number is not None:
        return number
    if cell.lower() in ("true", "false"):
        return cell.lower() == "true"
    return cell
