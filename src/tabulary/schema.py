"""Validation of the data used to build tables.

Data can be provided to a :class:`tabulary.Table` in two shapes:

* A list of records, where each record is a mapping
  from column name to the value of that column in the row.
* A mapping of columns, where each column name maps
  to the sequence of values of that column.

The input is classified once at the boundary into one of
the two variants, :class:`RecordList` or :class:`ColumnMap`,
and then validated into a normalized mapping of lists:

>>> validate([{"name": "A", "age": 10}, {"name": "B", "age": 20}])
{'name': ['A', 'B'], 'age': [10, 20]}
>>> validate({"name": ("A", "B"), "age": [10, 20]})
{'name': ['A', 'B'], 'age': [10, 20]}

Records must all provide the same columns:

>>> validate([{"name": "A", "age": 10}, {"name": "B"}])
Traceback (most recent call last):
    ...
tabulary.errors.SchemaMismatch: Record 1 does not contain the following column: 'age'
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .dtypes import check_column_name
from .errors import (
    InvalidInputShape,
    InvalidMask,
    LengthMismatch,
    MaskLengthMismatch,
    SchemaMismatch,
)

__all__ = (
    "RecordList",
    "ColumnMap",
    "classify",
    "validate",
    "is_sequence",
    "check_mask",
)


@dataclass(frozen=True)
class RecordList:
    """Data provided as a sequence of row records."""

    records: Sequence[Mapping[Any, Any]]


@dataclass(frozen=True)
class ColumnMap:
    """Data provided as a mapping of column names to sequences of values."""

    columns: Mapping[Any, Sequence[Any]]


def is_sequence(obj: Any) -> bool:
    """Tell if an object is a sequence of values.

    Strings and bytes are sequences for Python,
    but they are a single value for a table.
    """
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def classify(data: Any) -> RecordList | ColumnMap:
    """Resolve raw input data into one of the supported input variants.

    :param data: A sequence of records, a mapping of columns,
                 or an already classified :class:`RecordList`
                 or :class:`ColumnMap`.
    """
    if isinstance(data, (RecordList, ColumnMap)):
        return data
    if isinstance(data, Mapping):
        return ColumnMap(data)
    if is_sequence(data):
        return RecordList(data)
    raise InvalidInputShape(
        "Data must either be a list of records or a mapping of columns "
        f"({type(data).__name__} object provided)"
    )


def validate(data: Any) -> dict[Any, list[Any]]:
    """Validate input data and return it as a mapping of column lists.

    The returned lists are always new lists, so the
    validated data never shares storage with the input.
    """
    data = classify(data)
    if isinstance(data, RecordList):
        return _validate_records(data)
    return _validate_columns(data)


def _validate_records(data: RecordList) -> dict[Any, list[Any]]:
    columns: dict[Any, list[Any]] = {}
    for record in data.records:
        if not isinstance(record, Mapping):
            raise InvalidInputShape(
                "Records must be mappings of column names to values "
                f"({type(record).__name__} object provided)"
            )
        for name in record:
            if name not in columns:
                check_column_name(name)
                columns[name] = []

    for idx, record in enumerate(data.records):
        for name, values in columns.items():
            if name not in record:
                raise SchemaMismatch(
                    f"Record {idx} does not contain the following column: {name!r}"
                )
            values.append(record[name])
    return columns


def _validate_columns(data: ColumnMap) -> dict[Any, list[Any]]:
    columns: dict[Any, list[Any]] = {}
    for name, values in data.columns.items():
        check_column_name(name)
        if not is_sequence(values):
            raise InvalidInputShape(
                f"Column {name!r} must be a sequence of values "
                f"({type(values).__name__} object provided)"
            )
        columns[name] = list(values)

    lengths = {len(values) for values in columns.values()}
    if len(lengths) > 1:
        raise LengthMismatch(
            "Columns are not all of the same length: "
            + ", ".join(f"{name!r}={len(values)}" for name, values in columns.items())
        )
    return columns


def check_mask(mask: Any, nrows: int) -> list[bool]:
    """Ensure a row mask only contains booleans and has one entry per row.

    :param mask: The sequence of ``True``/``False`` values.
    :param nrows: The number of rows the mask must cover.
    """
    if not is_sequence(mask):
        raise InvalidMask(
            f"Mask must be a sequence of booleans ({type(mask).__name__} object provided)"
        )
    invalid = [v for v in mask if not isinstance(v, bool)]
    if invalid:
        raise InvalidMask(
            f"Mask contains non boolean values: {', '.join(repr(v) for v in invalid[:5])}"
        )
    if len(mask) != nrows:
        raise MaskLengthMismatch(
            f"Mask has {len(mask)} entries, but the table has {nrows} rows"
        )
    return list(mask)
