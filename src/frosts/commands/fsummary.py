"""Command line interface for summarising data files.

This module provides a command line interface that loads a CSV file
with :func:`frosts.open_csv`, or a Parquet file with :func:`frosts.open_parquet`,
and prints either the :meth:`frosts.DataFrame.describe` statistics of its
numeric columns or the result of a :meth:`frosts.DataFrame.group_by`.

The results are then printed to the console in a tabular format
using the :mod:`frosts.utils.tabulate` module.
"""

import argparse
import logging

from frosts import FrostConfig, FrostError, open_csv, open_parquet
from frosts.utils import tabulate


def parse_aggregations(options: list[str]) -> dict[str, list[str]]:
    """Parse ``COLUMN=agg1,agg2`` options into an aggregations mapping.

    >>> parse_aggregations(["Salary=mean,count", "Age=max"])
    {'Salary': ['mean', 'count'], 'Age': ['max']}
    """
    aggregations: dict[str, list[str]] = {}
    for option in options:
        column, _, names = option.rpartition("=")
        if not column or not names:
            raise ValueError(f"Invalid aggregation {option!r}, expected COLUMN=agg1,agg2")
        aggregations.setdefault(column, []).extend(n.strip() for n in names.split(","))
    return aggregations


def main() -> None:
    """Parse the command line arguments and summarise the file."""
    parser = argparse.ArgumentParser(description="Summarise the content of a CSV or Parquet file.")
    parser.add_argument(
        "filename", type=str, help="The CSV or Parquet file to summarise."
    )
    parser.add_argument(
        "-g",
        "--groupby",
        action="append",
        help="Group by this column. Can be provided multiple times.",
    )
    parser.add_argument(
        "-a",
        "--agg",
        action="append",
        help="Aggregate a column in the form COLUMN=agg1,agg2. Can be provided multiple times.",
    )
    parser.add_argument(
        "--separator", default="~~~", help="Separator used for composite group keys."
    )
    parser.add_argument(
        "--max-rows", type=int, default=20, help="Maximum number of rows to print."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug messages.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = FrostConfig(separator=args.separator)
        if args.filename.endswith(".parquet"):
            df = open_parquet(args.filename, config=config)
        else:
            df = open_csv(args.filename, config=config)
        if args.groupby:
            result = df.group_by(args.groupby, parse_aggregations(args.agg or []))
        else:
            result = df.describe()
    except (FrostError, ValueError) as e:
        print(f"Unable to summarise {args.filename}, {e}")
        return

    print(tabulate.tabulate(result, max_rows=args.max_rows))


if __name__ == "__main__":
    main()
