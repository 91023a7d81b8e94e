from datapivot.dataframe import Dataframe
from datapivot.utils.charts import ChartType, draw_bar_chart, draw_line_chart

sales = Dataframe.open_csv("data/sales.csv")

totals = sales.group_by(["Region"], [("Sales", "Total", "sum")]).sort_by([("Total", True)])
print(draw_bar_chart(totals.to_table(), "Region", "Total"))
print()
print(draw_line_chart(sales.to_table(), "Units", "Sales", chart_type=ChartType.SCATTER))
