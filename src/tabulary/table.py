"""The Table object itself.

A :class:`Table` is a column oriented in-memory store:
an ordered mapping of column names to equal length lists of values.

Tables can be built from a list of records or from a mapping of columns,
in both cases the data is validated and the kind of each column is inferred:

>>> table = Table({"name": ["A", "B"], "age": [10, 20]})
>>> table.shape
(2, 2)
>>> table.dtypes
{'name': <DataKind.TEXT: 'text'>, 'age': <DataKind.INTEGER: 'integer'>}
>>> table.to_records()
[{'name': 'A', 'age': 10}, {'name': 'B', 'age': 20}]

Building a table copies the data provided, so a table
never shares its storage with the data it was built from
or with other tables. The only exception is :meth:`Table.to_columns`
which exposes the internal storage of the table.

Selections return new tables, while mutations change the table in place:

>>> adults = table.select_rows([v >= 18 for v in table.select("age")])
>>> adults.to_records()
[{'name': 'B', 'age': 20}]
>>> table.add_column("city", ["Rome", "Milan"])
>>> table.columns
['name', 'age', 'city']
"""

import logging
import os
from collections.abc import Iterable
from typing import Any, Self

import pyarrow as pa

from .dtypes import (
    DataKind,
    arrow_type,
    check_column_name,
    convert_value,
    infer_kind,
    kind_of,
)
from .errors import (
    ColumnAlreadyExists,
    ColumnNotFound,
    ConversionError,
    InvalidInputShape,
    LengthMismatch,
    SchemaMismatch,
    TypeMismatch,
    UnsupportedValue,
)
from .schema import ColumnMap, check_mask, is_sequence, validate
from .utils.tabulate import tabulate

__all__ = ("Table",)

logger = logging.getLogger(__name__)


class Table:
    """Data structure that handles data in rows and columns.

    The Table keeps the data organized by columns,
    each column is a list of values all of the same
    :class:`tabulary.dtypes.DataKind` (or null).

    Alongside the data, the table keeps a type map
    recording the kind of each column, which is exposed
    as :attr:`Table.dtypes`.
    """

    def __init__(self, data: Any) -> None:
        """
        :param data: A list of records (mappings of column name to value),
                     a mapping of column names to sequences of values,
                     or a :class:`tabulary.schema.RecordList` or
                     :class:`tabulary.schema.ColumnMap`.
        """
        columns = validate(data)
        self._dtypes = {name: infer_kind(name, values) for name, values in columns.items()}
        self._columns = columns
        logger.debug("Built table with shape %s", self.shape)

    @classmethod
    def from_arrow(cls, data: pa.Table | pa.RecordBatch) -> Self:
        """Build a Table out of a :class:`pyarrow.Table` or :class:`pyarrow.RecordBatch`.

        :param data: The Arrow data to load, its columns must be
                     of types that map to a :class:`tabulary.dtypes.DataKind`.
        """
        if not isinstance(data, (pa.Table, pa.RecordBatch)):
            raise InvalidInputShape(
                f"Expected a pyarrow Table or RecordBatch, got {type(data).__name__}"
            )
        return cls(ColumnMap(data.to_pydict()))

    def __str__(self) -> str:
        return tabulate(self)

    def __repr__(self) -> str:
        return f"Table(columns={self.columns!r}, rows={self.nrows})"

    def __len__(self) -> int:
        return self.nrows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return (
            list(self._columns.items()) == list(other._columns.items())
            and self._dtypes == other._dtypes
        )

    @property
    def nrows(self) -> int:
        """Number of rows in the table."""
        for values in self._columns.values():
            return len(values)
        return 0

    @property
    def ncols(self) -> int:
        """Number of columns in the table."""
        return len(self._columns)

    @property
    def shape(self) -> tuple[int, int]:
        """Dimensions of the table as ``(nrows, ncols)``."""
        return (self.nrows, self.ncols)

    @property
    def columns(self) -> list[Any]:
        """Names of the columns in the table, in order."""
        return list(self._columns)

    @property
    def dtypes(self) -> dict[Any, DataKind]:
        """The kind of each column in the table."""
        return dict(self._dtypes)

    def disp(self, limit: int | None = None) -> None:
        """Print the content of the table.

        :param limit: The maximum number of rows to print,
                      all rows are printed when ``None``.
        """
        if limit is None:
            limit = self.nrows
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError(f"Limit must be an integer, got {type(limit).__name__}")
        print(tabulate(self, max_rows=limit))

    def copy(self) -> Self:
        """Return a copy of the table that doesn't share storage with it.

        The copy keeps the column kinds of the table
        without inferring them again.
        """
        copied = self.__class__.__new__(self.__class__)
        copied._columns = {name: list(values) for name, values in self._columns.items()}
        copied._dtypes = dict(self._dtypes)
        return copied

    def to_records(self) -> list[dict[Any, Any]]:
        """Return the content of the table as a list of row records."""
        names = list(self._columns)
        return [dict(zip(names, row)) for row in zip(*self._columns.values())]

    def to_columns(self) -> dict[Any, list[Any]]:
        """Return the content of the table as a mapping of columns.

        This is the internal storage of the table, modifying it
        will modify the table itself.
        """
        return self._columns

    def to_arrow(self) -> pa.Table:
        """Return the content of the table as a :class:`pyarrow.Table`.

        Arrow only supports textual column names, so
        column names are converted to strings.
        """
        return pa.table(
            {
                str(name): pa.array(values, type=arrow_type(self._dtypes[name]))
                for name, values in self._columns.items()
            }
        )

    def to_csv(self, filename: str | os.PathLike, delimiter: str = ",") -> None:
        """Write the table to a delimited text file.

        See :func:`tabulary.fileio.write_csv`.
        """
        from .fileio import write_csv

        write_csv(self, filename, delimiter=delimiter)

    def select(self, column: Any) -> list[Any]:
        """Return the values of a column.

        :param column: The name of the column.
        """
        self._check_column_exists(column)
        return self._columns[column]

    def select_columns(self, names: Iterable[Any]) -> Self:
        """Return a new table containing only the specified columns.

        The columns of the new table will be in the order
        they were provided.

        :param names: The names of the columns to keep.
        """
        if not is_sequence(names):
            raise InvalidInputShape(
                f"Column names must be provided as a list ({type(names).__name__} object provided)"
            )
        selected: dict[Any, list[Any]] = {}
        for name in names:
            self._check_column_exists(name)
            if name in selected:
                raise ColumnAlreadyExists(f"Column {name!r} was selected more than once")
            selected[name] = self._columns[name]
        return self.__class__(ColumnMap(selected))

    def select_rows(self, mask: Iterable[bool]) -> Self:
        """Return a new table containing only the rows where the mask is ``True``.

        The mask is usually built out of the values of a column::

            table.select_rows([age >= 18 for age in table.select("age")])

        :param mask: A sequence of booleans, one for each row of the table.
        """
        mask = check_mask(mask, self.nrows)
        return self.__class__(
            ColumnMap(
                {
                    name: [v for v, keep in zip(values, mask) if keep]
                    for name, values in self._columns.items()
                }
            )
        )

    def unique_combinations(
        self, columns: Iterable[Any], include_null: bool = True
    ) -> list[dict[Any, Any]]:
        """Return the unique combinations of values found in the specified columns.

        The combinations are returned in the order they are
        first found in the table.

        >>> table = Table({"a": [1, 1, 2, None], "b": ["x", "x", "y", "z"]})
        >>> table.unique_combinations(["a", "b"])
        [{'a': 1, 'b': 'x'}, {'a': 2, 'b': 'y'}, {'a': None, 'b': 'z'}]
        >>> table.unique_combinations(["a", "b"], include_null=False)
        [{'a': 1, 'b': 'x'}, {'a': 2, 'b': 'y'}]

        :param columns: The columns whose values form the combinations.
        :param include_null: When ``False`` combinations containing
                             null or empty string values are skipped.
        """
        if not is_sequence(columns):
            raise InvalidInputShape(
                f"Column names must be provided as a list ({type(columns).__name__} object provided)"
            )
        columns = list(columns)
        for name in columns:
            self._check_column_exists(name)
        return [
            dict(zip(columns, combo))
            for combo in self._iter_combinations(columns, include_null=include_null)
        ]

    def add_column(self, name: Any, values: Iterable[Any]) -> None:
        """Append a new column to the table.

        The values must provide one entry for each row in the
        table, unless the table has no columns yet, in which
        case the new column defines the number of rows.

        :param name: The name of the new column.
        :param values: The values of the new column.
        """
        check_column_name(name)
        if name in self._columns:
            raise ColumnAlreadyExists(f"Column {name!r} already exists in the table")
        if not is_sequence(values):
            raise InvalidInputShape(
                f"Column values must be a sequence ({type(values).__name__} object provided)"
            )
        if self._columns and len(values) != self.nrows:
            raise LengthMismatch(
                f"Column {name!r} has {len(values)} values, but the table has {self.nrows} rows"
            )
        values = list(values)
        kind = infer_kind(name, values)
        self._columns[name] = values
        self._dtypes[name] = kind

    def remove_column(self, name: Any) -> None:
        """Remove a column from the table.

        Removing a column that doesn't exist does nothing.
        """
        self._columns.pop(name, None)
        self._dtypes.pop(name, None)

    def rename_column(self, old_name: Any, new_name: Any) -> None:
        """Change the name of a column.

        The renamed column is moved at the end of the table.
        If a column named ``new_name`` already exists,
        it gets replaced by the renamed column.

        :param old_name: The current name of the column.
        :param new_name: The name the column should have.
        """
        self._check_column_exists(old_name)
        if old_name == new_name:
            return
        check_column_name(new_name)
        if new_name in self._columns:
            logger.debug("Renaming %r replaces existing column %r", old_name, new_name)
        self._columns[new_name] = self._columns.pop(old_name)
        self._dtypes[new_name] = self._dtypes.pop(old_name)

    def convert(self, columns: Any, kind: DataKind | str) -> None:
        """Convert one or more columns to a different kind.

        >>> table = Table({"age": ["10", "", "30"]})
        >>> table.convert("age", DataKind.INTEGER)
        >>> table.select("age")
        [10, None, 30]

        All values are converted before the table is modified,
        so if any value can't be converted the table is left untouched.
        The column kind is set to the requested one even when
        all the converted values are null.

        :param columns: A column name or a list, tuple or set of column names.
        :param kind: The :class:`tabulary.dtypes.DataKind` to convert to,
                     or its name like ``"integer"``.
        """
        try:
            kind = DataKind(kind)
        except ValueError:
            raise ConversionError(f"Unsupported conversion target: {kind!r}") from None

        if isinstance(columns, (list, tuple, set, frozenset)):
            names = list(columns)
        else:
            names = [columns]
        for name in names:
            self._check_column_exists(name)

        converted = {
            name: [convert_value(v, kind) for v in self._columns[name]] for name in names
        }
        for name, values in converted.items():
            self._columns[name] = values
            self._dtypes[name] = kind

    def change_values(self, column: Any, value: Any, mask: Iterable[bool]) -> None:
        """Set a value in the rows of a column where the mask is ``True``.

        The value must be of the same kind of the column,
        a column that only contains nulls only accepts ``None``.

        :param column: The name of the column to modify.
        :param value: The value to set.
        :param mask: A sequence of booleans, one for each row of the table.
        """
        self._check_column_exists(column)
        column_kind = self._dtypes[column]
        try:
            value_kind = kind_of(value)
        except UnsupportedValue:
            raise TypeMismatch(
                f"Value {value!r} can't be stored in column {column!r} "
                f"of kind {column_kind.value}"
            ) from None
        if value_kind is not column_kind:
            raise TypeMismatch(
                f"Value {value!r} is of kind {value_kind.value}, "
                f"but column {column!r} is of kind {column_kind.value}"
            )
        mask = check_mask(mask, self.nrows)

        values = self._columns[column]
        for idx, selected in enumerate(mask):
            if selected:
                values[idx] = value

    def drop_duplicates(self, inplace: bool = False) -> Self | None:
        """Remove the rows that are duplicates of a previous row.

        Only the first occurrence of each row is kept,
        and rows keep their original order.

        >>> table = Table({"a": [1, 1, 2], "b": ["x", "x", "y"]})
        >>> table.drop_duplicates().to_records()
        [{'a': 1, 'b': 'x'}, {'a': 2, 'b': 'y'}]

        :param inplace: When ``True`` the table itself is modified
                        and ``None`` is returned, otherwise a new
                        table is returned.
        """
        if not isinstance(inplace, bool):
            raise TypeError(f"inplace must be True or False, got {inplace!r}")

        deduplicated: dict[Any, list[Any]] = {name: [] for name in self._columns}
        seen = set()
        for row in zip(*self._columns.values()):
            if row in seen:
                continue
            seen.add(row)
            for values, value in zip(deduplicated.values(), row):
                values.append(value)

        logger.debug("Dropped %d duplicated rows", self.nrows - len(seen))
        # Rows come from an already valid table, no need to validate them again.
        if inplace:
            self._columns = deduplicated
            return None
        return self.__class__(ColumnMap(deduplicated))

    def append(self, other: "Table", inplace: bool = False) -> Self | None:
        """Append the rows of another table to the rows of this one.

        Both tables must have the same columns with the same kinds.

        :param other: The table whose rows have to be appended.
        :param inplace: When ``True`` the rows are appended to this table
                        and ``None`` is returned, otherwise a new table is returned.
        """
        if not isinstance(inplace, bool):
            raise TypeError(f"inplace must be True or False, got {inplace!r}")
        if not isinstance(other, Table):
            raise TypeError(
                f"Only tables can be appended to a table ({type(other).__name__} object provided)"
            )
        if self._dtypes != other._dtypes:
            raise SchemaMismatch(
                "Column names and kinds of the table to append do not match: "
                f"{_describe_dtypes(other._dtypes)} != {_describe_dtypes(self._dtypes)}"
            )

        if inplace:
            for name, values in other._columns.items():
                self._columns[name] = self._columns[name] + values
            return None
        return self.__class__(
            ColumnMap(
                {name: values + other._columns[name] for name, values in self._columns.items()}
            )
        )

    def merge(
        self,
        other: "Table",
        keys: Iterable[Any],
        right_suffix: str = "_x",
        left_suffix: str = "_y",
    ) -> Self:
        """Join this table with another one on the specified key columns.

        See :func:`tabulary.join.merge`.
        """
        from .join import merge

        return merge(self, other, keys, right_suffix=right_suffix, left_suffix=left_suffix)

    def _check_column_exists(self, name: Any) -> None:
        if name not in self._columns:
            raise ColumnNotFound(f"Column {name!r} does not exist in the table")

    def _iter_combinations(
        self, columns: list[Any], include_null: bool = True
    ) -> Iterable[tuple[Any, ...]]:
        seen = set()
        for combo in zip(*(self._columns[name] for name in columns)):
            if not include_null and any(v is None or v == "" for v in combo):
                continue
            if combo not in seen:
                seen.add(combo)
                yield combo


def _describe_dtypes(dtypes: dict[Any, DataKind]) -> str:
    return "{" + ", ".join(f"{name!r}: {kind.value}" for name, kind in dtypes.items()) + "}"
