import pytest

from datapivot.compute import TableDataSource
from datapivot.compute.base import QueryPlanNode
from datapivot.compute.sorting import SortNode, sort_by
from datapivot.table import Table


class MockQueryPlanNode(QueryPlanNode):
    def __init__(self, table):
        self._table = table

    def execute(self):
        return self._table

    def __str__(self):
        return "MockQueryPlanNode"


def test_sort_node():
    data = Table.from_columns({"values": ["5", "3", "1", "4", "2"]})
    sort_node = SortNode(["values"], [False], MockQueryPlanNode(data))
    assert sort_node.execute().get_column("values") == ["1", "2", "3", "4", "5"]


def test_sort_node_descending():
    data = Table.from_columns({"values": ["1", "2", "3", "4", "5"]})
    sort_node = SortNode(["values"], [True], MockQueryPlanNode(data))
    assert sort_node.execute().get_column("values") == ["5", "4", "3", "2", "1"]


def test_sort_node_invalid_keys_and_descending_length():
    data = Table.from_columns({"values": ["1", "2", "3", "4", "5"]})
    with pytest.raises(ValueError):
        SortNode(["values"], [True, False], MockQueryPlanNode(data))


def test_sort_node_str():
    sort_node = SortNode(["a", "b"], [True, False], MockQueryPlanNode(Table()))
    assert str(sort_node) == (
        "SortNode(sorting=[('a', 'descending'), ('b', 'ascending')], MockQueryPlanNode)"
    )


def test_sort_by_sales_descending(sales):
    result = sort_by(sales, [("Sales", True)])
    assert result.row_count == 8
    assert result.get_cell("Sales", 0) == "300"
    assert result.get_column("Sales") == [
        "300",
        "250",
        "200",
        "200",
        "150",
        "150",
        "120",
        "100",
    ]
    # Ties keep their original order.
    assert result.get_column("Region") == [
        "North",
        "West",
        "East",
        "South",
        "South",
        "East",
        "West",
        "North",
    ]


def test_numbers_are_compared_numerically():
    data = Table.from_columns({"n": ["10", "9", "100", "-1", "2.5"]})
    assert sort_by(data, [("n", False)]).get_column("n") == [
        "-1",
        "2.5",
        "9",
        "10",
        "100",
    ]


def test_non_numbers_are_compared_as_strings():
    data = Table.from_columns({"s": ["banana", "Apple", "cherry", "apple"]})
    assert sort_by(data, [("s", False)]).get_column("s") == [
        "Apple",
        "apple",
        "banana",
        "cherry",
    ]


def test_multiple_keys(sales):
    result = sort_by(sales, [("Product", True), ("Units", False)])
    assert result.get_column("Product") == ["Bananas"] * 4 + ["Apples"] * 4
    assert result.get_column("Units") == [
        "15",
        "20",
        "25",
        "30",
        "10",
        "12",
        "15",
        "20",
    ]


def test_descending_applies_only_to_its_key():
    data = Table.from_columns(
        {"g": ["a", "b", "a", "b"], "n": ["1", "2", "3", "4"]}
    )
    result = sort_by(data, [("g", False), ("n", True)])
    assert result.get_column("n") == ["3", "1", "4", "2"]


def test_missing_columns_are_ignored(sales):
    result = sort_by(sales, [("Missing", True), ("Units", False)])
    assert result.get_column("Units") == sorted(
        sales.get_column("Units"), key=float
    )
    assert sort_by(sales, [("Missing", True)]) == sales


def test_sort_preserves_row_count_of_sparse_tables():
    data = Table.from_columns({"a": ["2", "1"]})
    data.add_column("b", ["x", "y", "z"])
    result = sort_by(data, [("a", False)])
    assert result.row_count == 3
    assert result.get_column("a") == ["", "1", "2"]
    assert result.get_column("b") == ["z", "y", "x"]


def test_sort_does_not_modify_input(sales):
    before = sales.copy()
    SortNode(["Sales"], [False], TableDataSource(sales)).execute()
    sort_by(sales, [("Sales", False)])
    assert sales == before


@pytest.mark.parametrize(
    "special,expected",
    [
        ("nan", ["1", "2", "3", "nan"]),
        ("inf", ["1", "2", "3", "inf"]),
        ("-Infinity", ["-Infinity", "1", "2", "3"]),
    ],
)
def test_non_finite_cells_are_compared_as_strings(special, expected):
    data = Table.from_columns({"n": ["3", special, "1", "2"]})
    assert sort_by(data, [("n", False)]).get_column("n") == expected
    assert sort_by(data, [("n", True)]).get_column("n") == expected[::-1]
