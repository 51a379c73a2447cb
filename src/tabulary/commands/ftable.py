"""Command line interface for transforming delimited files.

This module provides a command line interface to load one or more
delimited files into :class:`tabulary.Table` objects, combine them
with :func:`tabulary.concat` or :func:`tabulary.merge`, select
columns and drop duplicated rows.

The result is printed to the console in a tabular format
using the :mod:`tabulary.utils.tabulate` module, or written
to a new file when ``--output`` is provided::

    tabulary-ftable people.csv --merge ages.csv --on id --columns name,age
"""

import argparse
import logging

from tabulary import Table, TableError, concat, read_csv
from tabulary.utils import tabulate

logger = logging.getLogger(__name__)


def _split_names(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the command line arguments."""
    parser = argparse.ArgumentParser(description="Transform delimited files.")
    parser.add_argument("files", nargs="+", help="The delimited files to load.")
    parser.add_argument(
        "-s", "--sep", default=",", help="The delimiter used by the files."
    )
    parser.add_argument(
        "--concat",
        action="store_true",
        help="Concatenate the rows of all the files, otherwise only one file is accepted.",
    )
    parser.add_argument("--merge", help="A file to merge with the loaded data.")
    parser.add_argument(
        "--on", help="Comma separated list of the columns to merge on."
    )
    parser.add_argument(
        "-c", "--columns", help="Comma separated list of the columns to keep."
    )
    parser.add_argument(
        "--dedupe", action="store_true", help="Drop duplicated rows."
    )
    parser.add_argument("-o", "--output", help="Write the result to this file.")
    parser.add_argument(
        "-n", "--rows", type=int, default=20, help="Maximum number of rows to print."
    )
    parser.add_argument(
        "--dtypes", action="store_true", help="Print the kind of each column."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def run(args: argparse.Namespace) -> Table:
    """Load the files and apply the requested transformations."""
    tables = [read_csv(filename, delimiter=args.sep) for filename in args.files]
    if len(tables) > 1:
        if not args.concat:
            raise ValueError("Multiple files provided, use --concat to combine them.")
        table = concat(tables)
    else:
        table = tables[0]

    if args.merge:
        keys = _split_names(args.on)
        if not keys:
            raise ValueError("--merge requires the columns to merge on with --on.")
        table = table.merge(read_csv(args.merge, delimiter=args.sep), keys)

    columns = _split_names(args.columns)
    if columns:
        table = table.select_columns(columns)

    if args.dedupe:
        table = table.drop_duplicates()

    logger.info("Resulting table has shape %s", table.shape)
    return table


def main(argv: list[str] | None = None) -> int:
    """Parse the command line arguments and transform the files."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        table = run(args)
    except (TableError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    if args.output:
        table.to_csv(args.output, delimiter=args.sep)
        print(f"Wrote {table.nrows} rows to {args.output}")
    elif args.dtypes:
        print(tabulate.format_dtypes(table))
    else:
        print(tabulate.tabulate(table, max_rows=args.rows))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
