"""Kinds of values stored in tables and their inference.

Every column of a :class:`tabulary.Table` is homogeneous,
all the values it contains that are not null share the same
:class:`DataKind`. The set of kinds is closed, so conversion
and inference can cover all of them explicitly:

>>> kind_of("hello")
<DataKind.TEXT: 'text'>
>>> kind_of(None)
<DataKind.NULL: 'null'>
>>> infer_kind("age", [10, None, 20])
<DataKind.INTEGER: 'integer'>
>>> infer_kind("empty", [None, None])
<DataKind.NULL: 'null'>

Columns mixing kinds are refused:

>>> infer_kind("age", [10, "ten"])
Traceback (most recent call last):
    ...
tabulary.errors.MixedTypeError: Column 'age' contains multiple non-null kinds: integer, text

Values can be converted from one kind to another with :func:`convert_value`,
which is what :meth:`tabulary.Table.convert` relies on:

>>> convert_value("42", DataKind.INTEGER)
42
>>> convert_value("", DataKind.FLOAT) is None
True
>>> convert_value("2024-03-01", DataKind.DATE)
datetime.date(2024, 3, 1)
"""

import datetime
import enum
import math
from typing import Any, Iterable

import pyarrow as pa

from .errors import ConversionError, InvalidColumnName, MixedTypeError, UnsupportedValue

__all__ = (
    "DataKind",
    "kind_of",
    "check_column_name",
    "infer_kind",
    "convert_value",
    "arrow_type",
)


class DataKind(enum.Enum):
    """The kinds of values a column can contain."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    DATETIME = "datetime"
    NULL = "null"


# datetime must be checked before date as it's a subclass of it.
_PYTHON_KINDS = (
    (str, DataKind.TEXT),
    (int, DataKind.INTEGER),
    (float, DataKind.FLOAT),
    (datetime.datetime, DataKind.DATETIME),
    (datetime.date, DataKind.DATE),
)

_ARROW_TYPES = {
    DataKind.TEXT: pa.string(),
    DataKind.INTEGER: pa.int64(),
    DataKind.FLOAT: pa.float64(),
    DataKind.DATE: pa.date32(),
    DataKind.DATETIME: pa.timestamp("us"),
    DataKind.NULL: pa.null(),
}


def kind_of(value: Any, column: Any = None) -> DataKind:
    """Detect the kind of a single value.

    Booleans are refused even though in Python they
    are integers, a table can't store them.

    :param value: The value to inspect.
    :param column: The column the value belongs to, only
                   used to provide a better error message.
    """
    if value is None:
        return DataKind.NULL
    if not isinstance(value, bool):
        for pytype, kind in _PYTHON_KINDS:
            if isinstance(value, pytype):
                return kind

    where = f" in column {column!r}" if column is not None else ""
    raise UnsupportedValue(
        f"Unsupported value {value!r} of type {type(value).__name__}{where}, "
        f"supported kinds are: {', '.join(k.value for k in DataKind)}"
    )


def check_column_name(name: Any) -> None:
    """Ensure that a column name is of one of the supported scalar kinds.

    Column names can be text, integers, floats, dates or datetimes.
    Null is not a valid column name.
    """
    if name is None or isinstance(name, bool):
        valid = False
    else:
        valid = isinstance(name, tuple(pytype for pytype, _ in _PYTHON_KINDS))
    if not valid:
        raise InvalidColumnName(
            f"Invalid column name {name!r} of type {type(name).__name__}, "
            "column names can only be text, integer, float, date or datetime"
        )


def infer_kind(name: Any, values: Iterable[Any]) -> DataKind:
    """Infer the kind of a column from the values it contains.

    Null values are ignored, a column only made of nulls
    is of :attr:`DataKind.NULL` kind.

    :param name: The name of the column, used for error reporting.
    :param values: The values of the column.
    """
    kinds: list[DataKind] = []
    for value in values:
        kind = kind_of(value, column=name)
        if kind is not DataKind.NULL and kind not in kinds:
            kinds.append(kind)

    if len(kinds) > 1:
        raise MixedTypeError(
            f"Column {name!r} contains multiple non-null kinds: "
            f"{', '.join(k.value for k in kinds)}"
        )
    return kinds[0] if kinds else DataKind.NULL


def convert_value(value: Any, kind: DataKind) -> Any:
    """Convert a single value to the requested kind.

    * to ``TEXT`` any value is stringified, nulls become empty strings.
    * to ``INTEGER`` or ``FLOAT`` numbers and numeric strings are parsed.
    * to ``DATE`` or ``DATETIME`` ISO-8601 strings are parsed and
      dates and datetimes are converted between each other.
    * to ``NULL`` any value becomes ``None``.

    Except for ``TEXT``, nulls and empty strings convert to ``None``.

    :param value: The value to convert.
    :param kind: The :class:`DataKind` to convert the value to.
    """
    if kind is DataKind.NULL:
        return None
    if kind is DataKind.TEXT:
        return "" if value is None else str(value)
    if value is None or (isinstance(value, str) and value == ""):
        return None
    if kind is DataKind.INTEGER:
        return int(_parse_number(value, kind))
    if kind is DataKind.FLOAT:
        return float(_parse_number(value, kind))
    if kind in (DataKind.DATE, DataKind.DATETIME):
        return _parse_date(value, kind)
    raise ConversionError(f"Unsupported conversion target: {kind!r}")


def arrow_type(kind: DataKind) -> pa.DataType:
    """The :class:`pyarrow.DataType` used to store a kind in Arrow format."""
    return _ARROW_TYPES[kind]


def _parse_number(value: Any, kind: DataKind) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConversionError(
            f"Cannot convert {value!r} of type {type(value).__name__} to {kind.value}"
        )
    if isinstance(value, int):
        return value

    number = value
    if isinstance(value, str):
        try:
            # Integers are parsed exactly, without going through floats.
            return int(value)
        except ValueError:
            pass
        try:
            number = float(value)
        except ValueError:
            raise ConversionError(
                f"Cannot convert string value {value!r} to {kind.value}"
            ) from None

    if not math.isfinite(number):
        raise ConversionError(f"Cannot convert non finite value {value!r} to {kind.value}")
    return number


def _parse_date(value: Any, kind: DataKind) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date() if kind is DataKind.DATE else value
    if isinstance(value, datetime.date):
        if kind is DataKind.DATE:
            return value
        return datetime.datetime.combine(value, datetime.time())
    if isinstance(value, str):
        try:
            parsed = datetime.datetime.fromisoformat(value.strip())
        except ValueError:
            raise ConversionError(
                f"Cannot convert string value {value!r} to {kind.value}"
            ) from None
        return parsed.date() if kind is DataKind.DATE else parsed
    raise ConversionError(
        f"Cannot convert {value!r} of type {type(value).__name__} to {kind.value}"
    )
