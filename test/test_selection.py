import pytest

from datapivot.compute import TableDataSource
from datapivot.compute.selection import (
    ComputeColumnNode,
    ProjectNode,
    RenameNode,
    TransformNode,
    add_computed_column,
    rename,
    select,
    transform,
)
from datapivot.table import DuplicateColumnError, Table


@pytest.fixture
def mock_data():
    """Create a mock Table for testing."""
    return Table.from_columns({"a": ["1", "2", "3"], "b": ["4", "5", "6"], "c": ["7", "8", "9"]})


def revenue_per_unit(row):
    try:
        return str(float(row["Sales"]) / float(row["Units"]))
    except ValueError:
        return "0"


def test_select_columns(mock_data):
    """Test selecting specific columns."""
    result = select(mock_data, ["c", "a"])
    assert result.column_count == 2
    assert result.column_names == ["c", "a"]
    assert result.get_column("c") == ["7", "8", "9"]
    assert result.get_column("a") == ["1", "2", "3"]


def test_select_sales(sales):
    selected = select(sales, ["Region", "Sales"])
    assert selected.row_count == 8
    assert selected.column_count == 2
    assert selected.has_column("Region")
    assert selected.has_column("Sales")
    assert not selected.has_column("Product")


def test_select_skips_unknown_columns(mock_data):
    result = select(mock_data, ["missing", "b"])
    assert result.column_names == ["b"]
    assert not result.has_column("missing")


def test_select_keeps_row_count_without_columns(mock_data):
    result = select(mock_data, ["missing"])
    assert result.column_count == 0
    assert result.row_count == 3


def test_select_is_idempotent(sales):
    columns = ["Units", "Region", "Nope"]
    once = select(sales, columns)
    assert select(once, columns) == once


def test_project_node_str(mock_data):
    project_node = ProjectNode(["a", "b"], TableDataSource(mock_data))
    assert str(project_node) == (
        "ProjectNode(select=['a', 'b'], child=TableDataSource(columns=['a', 'b', 'c'], rows=3))"
    )
    assert project_node.execute().column_names == ["a", "b"]


def test_rename_sales(sales):
    renamed = rename(sales, [("Sales", "Revenue")])
    assert renamed.row_count == 8
    assert renamed.column_count == 4
    assert renamed.has_column("Revenue")
    assert not renamed.has_column("Sales")
    assert renamed.column_names == ["Revenue", "Region", "Product", "Units"]
    assert renamed.get_column("Revenue") == sales.get_column("Sales")


def test_rename_order_follows_pairs(mock_data):
    result = rename(mock_data, [("c", "C"), ("missing", "M"), ("a", "A")])
    assert result.column_names == ["C", "A", "b"]


def test_rename_swap(mock_data):
    result = rename(mock_data, {"a": "b", "b": "a"})
    assert result.column_names == ["b", "a", "c"]
    assert result.get_column("b") == ["1", "2", "3"]


@pytest.mark.parametrize(
    "pairs",
    [
        [("a", "c")],
        [("a", "x"), ("b", "x")],
    ],
)
def test_rename_collision(mock_data, pairs):
    with pytest.raises(DuplicateColumnError):
        rename(mock_data, pairs)


def test_rename_node(mock_data):
    node = RenameNode({"a": "A"}, TableDataSource(mock_data))
    assert node.execute().column_names == ["A", "b", "c"]


def test_add_computed_column(sales):
    add_computed_column(sales, "RevPerUnit", revenue_per_unit)
    assert sales.column_count == 5
    assert sales.has_column("RevPerUnit")
    assert len(sales.get_column("RevPerUnit")) == 8
    assert sales.get_column("RevPerUnit") == ["10.0"] * 8


def test_add_computed_column_receives_rows_in_order(mock_data):
    seen = []

    def record(row):
        seen.append(row["a"])
        return row["a"] + row["c"]

    add_computed_column(mock_data, "ac", record)
    assert seen == ["1", "2", "3"]
    assert mock_data.get_column("ac") == ["17", "28", "39"]


def test_compute_column_node_does_not_modify_source(mock_data):
    node = ComputeColumnNode("d", lambda row: "x", TableDataSource(mock_data))
    result = node.execute()
    assert result.get_column("d") == ["x", "x", "x"]
    assert not mock_data.has_column("d")


def test_transform(mock_data):
    result = transform(mock_data, ["a", "c", "missing"], lambda cells: cells[::-1])
    assert result.column_names == ["a", "b", "c"]
    assert result.get_column("a") == ["3", "2", "1"]
    assert result.get_column("b") == ["4", "5", "6"]
    assert result.get_column("c") == ["9", "8", "7"]
    # The source table is not affected.
    assert mock_data.get_column("a") == ["1", "2", "3"]


def test_transform_changing_length(mock_data):
    shorter = transform(mock_data, ["a"], lambda cells: cells[:1])
    assert shorter.row_count == 3
    assert shorter.get_column("a") == ["1", "", ""]

    longer = transform(mock_data, ["a"], lambda cells: cells + ["4"])
    assert longer.row_count == 4
    assert longer.get_column("b") == ["4", "5", "6", ""]


def test_transform_node(mock_data):
    node = TransformNode(["b"], lambda cells: [c * 2 for c in cells], TableDataSource(mock_data))
    assert node.execute().get_column("b") == ["44", "55", "66"]
