import pytest

from datapivot.compute import TableDataSource
from datapivot.compute.pivot import PivotNode, PivotTable, pivot
from datapivot.table import DuplicateColumnError, Table


def test_pivot_sales(sales):
    pt = pivot(sales, "Region", "Product", "Sales", "sum")
    assert isinstance(pt, PivotTable)
    assert pt.row_labels == ["North", "South", "East", "West"]
    assert pt.column_labels == ["Apples", "Bananas"]
    assert pt.get("North", "Apples") == "100.0"
    assert pt.get("North", "Bananas") == "300.0"
    assert pt.get("West", "Bananas") == "250.0"


def test_pivot_aggregates_repeated_combinations(sales):
    pt = pivot(sales, "Product", "Product", "Units", "avg")
    assert pt.row_labels == ["Apples", "Bananas"]
    assert pt.get("Apples", "Apples") == "14.25"
    assert pt.get("Bananas", "Bananas") == "22.5"
    assert pt.get("Apples", "Bananas") == ""


@pytest.mark.parametrize(
    "aggregation,expected",
    [
        ("sum", "450.0"),
        ("count", "2"),
        ("max", "300.0"),
        ("min", "150.0"),
        ("avg", "225.0"),
    ],
)
def test_pivot_named_aggregations(aggregation, expected):
    data = Table.from_columns(
        {"r": ["a", "a", "b"], "c": ["x", "x", "x"], "v": ["150", "300", "1"]}
    )
    assert pivot(data, "r", "c", "v", aggregation).get("a", "x") == expected


def test_pivot_custom_aggregation(sales):
    pt = pivot(sales, "Region", "Product", "Sales", lambda values: "|".join(values))
    assert pt.get("South", "Bananas") == "200"


def test_pivot_unknown_aggregation(sales):
    with pytest.raises(KeyError, match="Unknown aggregation"):
        pivot(sales, "Region", "Product", "Sales", "median")


@pytest.mark.parametrize(
    "fields",
    [
        ("Missing", "Product", "Sales"),
        ("Region", "Missing", "Sales"),
        ("Region", "Product", "Missing"),
    ],
)
def test_pivot_missing_field_is_empty(sales, fields):
    pt = pivot(sales, *fields)
    assert pt.row_labels == []
    assert pt.column_labels == []
    assert pt.values == {}
    assert pt.get("North", "Apples") == ""


def test_pivot_of_empty_table():
    data = Table.from_columns({"r": [], "c": [], "v": []})
    pt = pivot(data, "r", "c", "v")
    assert pt.row_labels == []
    assert pt.to_table().column_names == ["r"]


def test_pivot_to_table(sales):
    table = pivot(sales, "Product", "Region", "Sales").to_table()
    assert table.column_names == ["Product", "North", "South", "East", "West"]
    assert table.row_count == 2
    assert dict(table.row(1)) == {
        "Product": "Bananas",
        "North": "300.0",
        "South": "200.0",
        "East": "150.0",
        "West": "250.0",
    }


def test_pivot_to_table_fills_missing_combinations():
    data = Table.from_columns(
        {"r": ["a", "b"], "c": ["x", "y"], "v": ["1", "2"]}
    )
    table = pivot(data, "r", "c", "v").to_table()
    assert table.get_column("x") == ["1.0", ""]
    assert table.get_column("y") == ["", "2.0"]


def test_pivot_node(sales):
    node = PivotNode("Region", "Product", "Sales", "sum", TableDataSource(sales))
    assert str(node) == (
        "PivotNode(rows=Region, columns=Product, values=Sales, aggregation=sum, "
        "TableDataSource(columns=['Region', 'Product', 'Sales', 'Units'], rows=8))"
    )
    result = node.execute()
    assert result == pivot(sales, "Region", "Product", "Sales").to_table()


def test_pivot_label_clashing_with_row_field():
    data = Table.from_columns(
        {"Region": ["North", "South"], "Product": ["Region", "Apples"], "Sales": ["1", "2"]}
    )
    pt = pivot(data, "Region", "Product", "Sales")
    assert pt.get("North", "Region") == "1.0"
    with pytest.raises(DuplicateColumnError):
        pt.to_table()
    with pytest.raises(DuplicateColumnError):
        PivotNode("Region", "Product", "Sales", "sum", TableDataSource(data)).execute()


def test_pivot_table_with_repeated_labels():
    pt = PivotTable("r", "c", "v", len, row_labels=["a"], column_labels=["x", "x"])
    with pytest.raises(DuplicateColumnError):
        pt.to_table()
