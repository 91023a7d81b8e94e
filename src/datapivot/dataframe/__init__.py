"""Dataframe library built on top of datapivot.

A dataframe library is a tool designed to handle and manipulate structured data,
typically in the form of tables (i.e., rows and columns).
It allows users to load data from various sources (like CSV files),
explore it, apply transformations, and analyze it.

Dataframes provide a convenient way to chain operations such as filtering,
aggregation, reshaping and merging of datasets, each of them
builds a new step of the query plan and nothing is computed
until the data is requested::

    df = Dataframe.open_csv("sales.csv") \\
      .filter(lambda row: row["Year"] == "2024") \\
      .pivot("Region", "Product", "Sales", "sum")
    print(df.to_table())

This module exposes the datapivot compute capabilities
through a dataframe interface.
"""

from .dataframe import Dataframe

__all__ = ("Dataframe",)
