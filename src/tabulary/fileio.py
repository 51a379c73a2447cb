"""Load and save tables from delimited text files.

Reading and writing are delegated to :mod:`pyarrow.csv`,
the reader is configured to keep every value as text so
that the table receives the data exactly as it is in the file.
Converting the columns to the appropriate kinds is up to the
user through :meth:`tabulary.Table.convert`.
"""

import logging
import os

import pyarrow as pa
import pyarrow.csv

from .dtypes import DataKind, convert_value
from .schema import ColumnMap
from .table import Table

__all__ = ("read_csv", "write_csv")

logger = logging.getLogger(__name__)


def read_csv(filename: str | os.PathLike, delimiter: str = ",") -> Table:
    """Load a delimited text file into a Table.

    The first row of the file provides the column names,
    all values are loaded as text, empty cells are empty strings.

    :param filename: The path of the local file.
    :param delimiter: The character separating values in a row.
    """
    _check_filename(filename)
    parse_options = pa.csv.ParseOptions(delimiter=delimiter)

    # Poll the header first, so that all columns
    # can be forced to be loaded as text.
    with pa.csv.open_csv(filename, parse_options=parse_options) as reader:
        names = reader.schema.names

    data = pa.csv.read_csv(
        filename,
        parse_options=parse_options,
        convert_options=pa.csv.ConvertOptions(
            column_types={name: pa.string() for name in names},
            strings_can_be_null=False,
        ),
    )
    logger.debug("Read %d rows from %s", data.num_rows, filename)
    return Table(ColumnMap(data.to_pydict()))


def write_csv(table: Table, filename: str | os.PathLike, delimiter: str = ",") -> None:
    """Write a Table to a delimited text file.

    The first row written contains the column names,
    then a row for each record of the table.
    Values are written in their textual form and
    nulls are written as empty cells.

    :param table: The table to write.
    :param filename: The path of the local file to write.
    :param delimiter: The character separating values in a row.
    """
    if not isinstance(table, Table):
        raise TypeError(f"Expected a Table, got {type(table).__name__}")
    _check_filename(filename)

    data = pa.table(
        {
            str(name): pa.array(
                [None if v is None else convert_value(v, DataKind.TEXT) for v in values],
                type=pa.string(),
            )
            for name, values in table.to_columns().items()
        }
    )
    pa.csv.write_csv(
        data, filename, write_options=pa.csv.WriteOptions(delimiter=delimiter)
    )
    logger.debug("Wrote %d rows to %s", table.nrows, filename)


def _check_filename(filename: str | os.PathLike) -> None:
    if not isinstance(filename, (str, os.PathLike)):
        raise TypeError(
            f"Specified file name must be a string ({type(filename).__name__} object provided)"
        )
