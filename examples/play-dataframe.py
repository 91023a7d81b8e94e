from datapivot.dataframe import Dataframe
from datapivot.utils.tabulate import tabulate

managers = Dataframe.open_json("data/managers.json")

df = Dataframe.open_csv("data/sales.csv") \
  .group_by(["Region", "Product"], [("Sales", "Total", "sum"), ("Units", "Orders", "count")]) \
  .join(managers, ["Region"], "left") \
  .sort_by([("Total", True)])

print(df)
print(tabulate(df.to_table(), max_rows=10))
