"""Query Plan nodes that load data

The datasource nodes are expected to fetch the data from some source,
convert it into a :class:`datapivot.table.Table` and forward it
to the next node in the plan.

They are used to do things like loading
data from CSV files or equivalent operations.

All cells are loaded as text, so that the exact content
of the source is preserved (``"1.50"`` stays ``"1.50"``)
and missing values become empty strings.
"""

import json
import logging
from abc import abstractmethod

import pyarrow as pa
import pyarrow.csv
import pyarrow.parquet

from ..table import Table
from .base import QueryPlanNode

logger = logging.getLogger(__name__)


class DataSourceNode(QueryPlanNode):
    """Base class for nodes that load data from a source."""

    @abstractmethod
    def poll_columns(self) -> list[str]:
        """Poll the column names of the data source without loading its content."""
        ...


class CSVDataSource(DataSourceNode):
    """Load data from a CSV file.

    Given a local CSV file path, load the content,
    convert it into a Table, and emit it
    for the next nodes of the query plan to consume.

    Every row must have as many cells as the header,
    files with short or long rows are rejected by pyarrow
    with :class:`pyarrow.ArrowInvalid`.
    """

    def __init__(self, filename: str, delimiter: str = ",") -> None:
        """
        :param filename: The path of the local CSV file.
        :param delimiter: The character separating cells in a row.
        """
        self.filename = filename
        self.delimiter = delimiter

    def __str__(self) -> str:
        return f"CSVDataSource({self.filename}, delimiter={self.delimiter!r})"

    def execute(self) -> Table:
        """Open the CSV file and load all of its content as text."""
        parse_options = pa.csv.ParseOptions(delimiter=self.delimiter)
        # Force every column to be a string, otherwise pyarrow
        # would infer numbers and lose the original text.
        column_types = {name: pa.string() for name in self.poll_columns()}
        data = pa.csv.read_csv(
            self.filename,
            parse_options=parse_options,
            convert_options=pa.csv.ConvertOptions(
                column_types=column_types, strings_can_be_null=False
            ),
        )
        logger.debug("Loaded %d rows from %s", data.num_rows, self.filename)
        return Table.from_arrow(data)

    def poll_columns(self) -> list[str]:
        """Poll the column names of the CSV file."""
        parse_options = pa.csv.ParseOptions(delimiter=self.delimiter)
        with pa.csv.open_csv(self.filename, parse_options=parse_options) as reader:
            return reader.schema.names


class JSONDataSource(DataSourceNode):
    """Load data from a JSON file.

    The file is expected to contain an array of objects,
    each object is a row of the table.
    Columns are the union of the keys of all objects,
    in the order they are first found.
    """

    def __init__(self, filename: str) -> None:
        """
        :param filename: The path of the local JSON file.
        """
        self.filename = filename

    def __str__(self) -> str:
        return f"JSONDataSource({self.filename})"

    def _load(self) -> list[dict]:
        with open(self.filename, encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise ValueError(f"{self.filename}: JSON must be an array of objects")
        return [record for record in records if isinstance(record, dict)]

    def execute(self) -> Table:
        """Load the JSON file converting all values to text."""
        records = self._load()
        columns = list(dict.fromkeys(key for record in records for key in record))

        table = Table()
        for name in columns:
            table.add_column(name)
        for record in records:
            table.add_row([(name, _json_to_cell(record.get(name))) for name in columns])
        logger.debug("Loaded %d rows from %s", table.row_count, self.filename)
        return table

    def poll_columns(self) -> list[str]:
        """Poll the column names of the JSON file.

        JSON has no header, so the whole file has to be read.
        """
        return list(dict.fromkeys(key for record in self._load() for key in record))


class ParquetDataSource(DataSourceNode):
    """Load data from a Parquet file.

    Given a local parquet file path, load the content,
    convert it into a Table, and emit it
    for the next nodes of the query plan to consume.
    """

    def __init__(self, filename: str) -> None:
        """
        :param filename: The path of the local parquet file.
        """
        self.filename = filename

    def __str__(self) -> str:
        return f"ParquetDataSource({self.filename})"

    def execute(self) -> Table:
        """Open the Parquet file and convert its content to text."""
        with pa.parquet.ParquetFile(self.filename) as reader:
            return Table.from_arrow(reader.read())

    def poll_columns(self) -> list[str]:
        """Poll the column names of the Parquet file."""
        with pa.parquet.ParquetFile(self.filename) as reader:
            return reader.schema_arrow.names


class TableDataSource(DataSourceNode):
    """Use an in-memory Table, pyarrow.Table or pyarrow.RecordBatch as a data source.

    Pyarrow data is converted to a :class:`datapivot.table.Table`
    with all values converted to text.
    """

    def __init__(self, table: Table | pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        if isinstance(table, (pa.Table, pa.RecordBatch)):
            table = Table.from_arrow(table)
        self.table = table

    def __str__(self) -> str:
        return f"TableDataSource(columns={self.table.column_names}, rows={self.table.row_count})"

    def execute(self) -> Table:
        """Emit the data contained in the Table for consumption by other nodes.

        A copy is emitted, so that consumers can't alter the source.
        """
        return self.table.copy()

    def poll_columns(self) -> list[str]:
        """Poll the columns of the Table."""
        return self.table.column_names


def _json_to_cell(value: object) -> str:
    """Convert a JSON value to a cell."""
    if value is None:
        return ""
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, str):
        return value
    elif isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)
