import os
import csv
import json
import random

if not os.path.exists("data"):
    os.mkdir("data")

regions = ["North", "South", "East", "West", "Center"]
products = ["Apples", "Bananas", "Cherries", "Pears"]

if not os.path.exists("data/sales.csv"):
  sales = []
  for i in range(1000):
    units = random.randint(1, 50)
    price = round(random.uniform(0.5, 5), 2)
    sales.append([random.choice(regions), random.choice(products), round(units * price, 2), units])

  with open('data/sales.csv', 'w', newline='') as f:
    writer = csv.writer(f)
    writer.writerow(["Region", "Product", "Sales", "Units"])
    writer.writerows(sales)

if not os.path.exists("data/managers.json"):
  managers = [{"Region": region, "Manager": f"Manager of {region}"} for region in regions]
  with open('data/managers.json', 'w') as f:
    json.dump(managers, f, indent=2)
