from datapivot.compute import CSVDataSource, FilterNode, PivotNode, SortNode
from datapivot.utils.tabulate import tabulate

query = PivotNode(
    "Region",
    "Product",
    "Sales",
    "avg",
    SortNode(
        ["Region"],
        [False],
        FilterNode(lambda row: int(row["Units"]) >= 10, CSVDataSource("data/sales.csv")),
    ),
)
print(query)
print(tabulate(query.execute()))
