"""Command line interface for pivoting data files.

This module provides a command line interface that loads a data file
through the DataPivot data sources, builds a pivot table out of it
with :class:`datapivot.compute.PivotNode` and prints it.

The results of the execution are printed to the console in a tabular format
using the :mod:`datapivot.utils.tabulate` module.
"""

import argparse
import logging

from datapivot.compute import (
    CSVDataSource,
    JSONDataSource,
    ParquetDataSource,
    PivotNode,
    available_aggregations,
)
from datapivot.compute.datasources import DataSourceNode
from datapivot.utils import tabulate

SOURCES = {
    "csv": CSVDataSource,
    "json": JSONDataSource,
    "parquet": ParquetDataSource,
}


def make_source(filename: str, fmt: str | None = None) -> DataSourceNode:
    """Build the data source for a file, guessing the format from its extension."""
    if fmt is None:
        fmt = filename.rsplit(".", 1)[-1].lower()
    try:
        return SOURCES[fmt](filename)
    except KeyError:
        raise ValueError(
            f"Unsupported format {fmt!r}, expected one of {list(SOURCES)}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pivot the data of a file.")
    parser.add_argument("file", type=str, help="The data file to load.")
    parser.add_argument(
        "-r", "--rows", required=True, help="The field whose values become rows."
    )
    parser.add_argument(
        "-c", "--columns", required=True, help="The field whose values become columns."
    )
    parser.add_argument(
        "-v", "--values", required=True, help="The field to aggregate."
    )
    parser.add_argument(
        "-a",
        "--agg",
        default="sum",
        choices=available_aggregations(),
        help="The aggregation to apply (default: sum).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=list(SOURCES),
        help="Format of the file, guessed from the extension when omitted.",
    )
    parser.add_argument(
        "--max-rows", type=int, default=20, help="How many rows to print."
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log what the engine is doing."
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse the command line arguments and print the pivot table."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = make_source(args.file, args.format)
    except ValueError as e:
        print(f"Invalid input, {e}")
        return

    plan = PivotNode(args.rows, args.columns, args.values, args.agg, source)
    logging.getLogger(__name__).debug("Executing %s", plan)
    print(tabulate.tabulate(plan.execute(), max_rows=args.max_rows))


if __name__ == "__main__":
    main()
