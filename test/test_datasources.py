import json

import pyarrow as pa
import pyarrow.csv as csv
import pyarrow.parquet as pq
import pytest

from datapivot.compute.datasources import (
    CSVDataSource,
    JSONDataSource,
    ParquetDataSource,
    TableDataSource,
)
from datapivot.compute.sinks import cell_to_json, write_csv, write_json, write_parquet
from datapivot.table import Table

# Mock data for testing
MOCK_PYARROW_TABLE = pa.table({"col1": [1, 4, 7], "col2": [2, 5, 8], "col3": ["a", None, "c"]})

EXPECTED_TABLE = Table.from_columns(
    {"col1": ["1", "4", "7"], "col2": ["2", "5", "8"], "col3": ["a", "", "c"]}
)


@pytest.fixture
def csv_file(tmp_path):
    filename = str(tmp_path / "data.csv")
    csv.write_csv(MOCK_PYARROW_TABLE, filename)
    return filename


@pytest.fixture
def parquet_file(tmp_path):
    filename = str(tmp_path / "data.parquet")
    pq.write_table(MOCK_PYARROW_TABLE, filename)
    return filename


@pytest.fixture
def json_file(tmp_path):
    filename = str(tmp_path / "data.json")
    with open(filename, "w") as f:
        json.dump(
            [
                {"name": "Alice", "age": 30, "member": True},
                {"name": "Bob", "city": "Rome", "member": None},
            ],
            f,
        )
    return filename


def test_init_and_str(csv_file, parquet_file, json_file):
    assert str(CSVDataSource(csv_file)) == f"CSVDataSource({csv_file}, delimiter=',')"
    assert str(CSVDataSource(csv_file, ";")) == f"CSVDataSource({csv_file}, delimiter=';')"
    assert str(ParquetDataSource(parquet_file)) == f"ParquetDataSource({parquet_file})"
    assert str(JSONDataSource(json_file)) == f"JSONDataSource({json_file})"
    assert (
        str(TableDataSource(MOCK_PYARROW_TABLE))
        == "TableDataSource(columns=['col1', 'col2', 'col3'], rows=3)"
    )
    assert (
        str(TableDataSource(MOCK_PYARROW_TABLE.to_batches()[0]))
        == "TableDataSource(columns=['col1', 'col2', 'col3'], rows=3)"
    )


def test_csv_data_source(csv_file):
    data_source = CSVDataSource(csv_file)
    assert data_source.poll_columns() == ["col1", "col2", "col3"]
    assert data_source.execute() == EXPECTED_TABLE


def test_csv_preserves_text(tmp_path):
    filename = tmp_path / "prices.csv"
    filename.write_text("Item;Price;Code\nApple;1.50;007\nPear;;010\n")
    table = CSVDataSource(str(filename), delimiter=";").execute()
    assert table.column_names == ["Item", "Price", "Code"]
    assert table.get_column("Price") == ["1.50", ""]
    assert table.get_column("Code") == ["007", "010"]


@pytest.mark.parametrize("content", ["a,b,c\n1,2,3\n4,5\n", "a,b\n1,2\n3,4,5\n"])
def test_csv_rows_must_match_the_header(tmp_path, content):
    filename = tmp_path / "ragged.csv"
    filename.write_text(content)
    with pytest.raises(pa.ArrowInvalid, match="Expected"):
        CSVDataSource(str(filename)).execute()


def test_parquet_data_source(parquet_file):
    data_source = ParquetDataSource(parquet_file)
    assert data_source.poll_columns() == ["col1", "col2", "col3"]
    assert data_source.execute() == EXPECTED_TABLE


def test_json_data_source(json_file):
    data_source = JSONDataSource(json_file)
    assert data_source.poll_columns() == ["name", "age", "member", "city"]
    table = data_source.execute()
    assert table.row_count == 2
    assert dict(table.row(0)) == {"name": "Alice", "age": "30", "member": "true", "city": ""}
    assert dict(table.row(1)) == {"name": "Bob", "age": "", "member": "", "city": "Rome"}


def test_json_data_source_requires_an_array(tmp_path):
    filename = tmp_path / "object.json"
    filename.write_text('{"name": "Alice"}')
    with pytest.raises(ValueError, match="array of objects"):
        JSONDataSource(str(filename)).execute()


def test_table_data_source_emits_a_copy():
    source = TableDataSource(EXPECTED_TABLE.copy())
    emitted = source.execute()
    emitted.add_column("extra", ["x"])
    assert source.execute() == EXPECTED_TABLE
    assert source.poll_columns() == ["col1", "col2", "col3"]


@pytest.mark.parametrize(
    "write, source_class",
    [(write_csv, CSVDataSource), (write_parquet, ParquetDataSource)],
)
def test_text_sinks_preserve_the_table(tmp_path, sales, write, source_class):
    sales.add_row({"Region": "North", "Product": "Cherries", "Sales": "1.50"})
    filename = str(tmp_path / "sales.out")
    write(sales, filename)
    assert source_class(filename).execute() == sales


def test_write_csv_with_delimiter(tmp_path, sales):
    filename = str(tmp_path / "sales.tsv")
    write_csv(sales, filename, delimiter="\t")
    assert CSVDataSource(filename, delimiter="\t").execute() == sales


def test_write_json(tmp_path):
    table = Table.from_columns(
        {"name": ["Alice", "Bob"], "age": ["30", "1.5"], "member": ["TRUE", ""]}
    )
    filename = tmp_path / "out.json"
    write_json(table, str(filename), pretty=False)
    assert json.loads(filename.read_text()) == [
        {"name": "Alice", "age": 30, "member": True},
        {"name": "Bob", "age": 1.5, "member": ""},
    ]
    assert "\n" not in filename.read_text()

    write_json(table, str(filename))
    assert filename.read_text().startswith("[\n  {")


@pytest.mark.parametrize(
    "cell, expected",
    [
        ("42", 42),
        ("-3", -3),
        ("2.5", 2.5),
        ("false", False),
        ("True", True),
        ("nan", "nan"),
        ("inf", "inf"),
        ("", ""),
        ("Rome", "Rome"),
    ],
)
def test_cell_to_json(cell, expected):
    assert cell_to_json(cell) == expected
