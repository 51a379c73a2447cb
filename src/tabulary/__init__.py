"""Tabulary

An in-memory tabular data engine.

Tabulary loads row or column oriented data into a :class:`Table`,
validating it and inferring the kind of each column,
and allows to select, mutate, convert and deduplicate the data,
to merge and concatenate tables, and to save them back to
delimited text files.

The primary components are:

* The Table, a column oriented store with its type map, see :mod:`tabulary.table`.
* The schema validation and type inference, see :mod:`tabulary.schema`
  and :mod:`tabulary.dtypes`.
* The Join Engine, see :mod:`tabulary.join`.
* The Concatenator, see :mod:`tabulary.concat`.
* Files loading and saving, see :mod:`tabulary.fileio`.

>>> from tabulary import Table, merge
>>> left = Table({"id": [1, 2], "x": [10, 20]})
>>> right = Table({"id": [2, 3], "y": [30, 40]})
>>> merge(left, right, ["id"]).to_records()
[{'id': 2, 'x': 20, 'y': 30}]
"""

import logging

from .concat import concat
from .dtypes import DataKind
from .errors import (
    ColumnAlreadyExists,
    ColumnNotFound,
    ConversionError,
    InsufficientInputs,
    InvalidColumnName,
    InvalidInputShape,
    InvalidMask,
    LengthMismatch,
    MaskLengthMismatch,
    MixedTypeError,
    SchemaMismatch,
    TableError,
    TypeMismatch,
    UnsupportedValue,
)
from .fileio import read_csv, write_csv
from .join import merge
from .schema import ColumnMap, RecordList
from .stats import mean, std
from .table import Table

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "Table",
    "DataKind",
    "RecordList",
    "ColumnMap",
    "merge",
    "concat",
    "read_csv",
    "write_csv",
    "mean",
    "std",
    "TableError",
    "InvalidInputShape",
    "SchemaMismatch",
    "LengthMismatch",
    "InvalidColumnName",
    "ColumnNotFound",
    "ColumnAlreadyExists",
    "MixedTypeError",
    "UnsupportedValue",
    "InvalidMask",
    "MaskLengthMismatch",
    "TypeMismatch",
    "ConversionError",
    "InsufficientInputs",
)
