import pytest

from datapivot.table import Table


def make_sales_table():
    """8 rows of sales, 2 products for each of the 4 regions."""
    return Table.from_columns(
        {
            "Region": ["North", "South", "East", "West"] * 2,
            "Product": ["Apples"] * 4 + ["Bananas"] * 4,
            "Sales": ["100", "150", "200", "120", "300", "200", "150", "250"],
            "Units": ["10", "15", "20", "12", "30", "20", "15", "25"],
        }
    )


@pytest.fixture
def sales():
    return make_sales_table()
