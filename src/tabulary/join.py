"""Relational merge of two tables.

The merge is an inner join: only the rows whose key columns
hold a combination of values that exists in both tables
are part of the result.

>>> from tabulary import Table
>>> left = Table({"id": [1, 2, 3], "name": ["Alice", "Bob", "Charlie"]})
>>> right = Table({"id": [3, 2], "age": [25, 30]})
>>> merge(left, right, ["id"]).to_records()
[{'id': 2, 'name': 'Bob', 'age': 30}, {'id': 3, 'name': 'Charlie', 'age': 25}]
"""

import logging
from collections.abc import Iterable
from typing import Any

from .dtypes import check_column_name
from .errors import ColumnNotFound, InvalidInputShape
from .schema import ColumnMap, is_sequence
from .table import Table

__all__ = ("merge",)

logger = logging.getLogger(__name__)


def merge(
    left: Table,
    right: Table,
    keys: Iterable[Any],
    right_suffix: str = "_x",
    left_suffix: str = "_y",
) -> Table:
    """Join two tables using an inner join on the specified key columns.

    The join is performed by finding the combinations of
    key values that both tables share and pairing every
    row of the left table with every row of the right table
    that holds the same combination.

    Supposing we have two tables::

        left:
        +----+-------+------+
        | id | name  | city |
        +----+-------+------+
        | 1  | Alice | Rome |
        | 2  | Bob   | Oslo |
        | 2  | Bob   | Rome |
        +----+-------+------+

        right:
        +----+-----+------+
        | id | age | city |
        +----+-----+------+
        | 2  | 30  | Nice |
        | 3  | 25  | Pisa |
        +----+-----+------+

    We would perform the following steps:

    1. Compute the unique combinations of the key columns in both tables,
       skipping the combinations that contain nulls or empty strings,
       and keep those that are found in both tables.
       Values only match when their key columns are of the same kind.
       The combinations keep the order they have in the left table::

        left_combinations = [{"id": 1}, {"id": 2}]
        right_combinations = [{"id": 2}, {"id": 3}]
        shared_combinations = [{"id": 2}]

    2. Compute the columns of the result. Key columns appear only once,
       columns that exist only in one of the two tables keep their name.
       Columns that exist in both tables but are not keys are renamed,
       the one coming from the left table gets ``right_suffix`` and
       the one coming from the right table gets ``left_suffix``::

        id, name, city_x, city_y, age

    3. For each shared combination, pair every left row holding it
       with every right row holding it, in the order they appear
       in their tables. So a combination found in ``m`` left rows
       and ``n`` right rows produces ``m * n`` rows::

        +----+------+--------+--------+-----+
        | id | name | city_x | city_y | age |
        +----+------+--------+--------+-----+
        | 2  | Bob  | Oslo   | Nice   | 30  |
        | 2  | Bob  | Rome   | Nice   | 30  |
        +----+------+--------+--------+-----+

    4. Build a new table out of the result, which validates
       it and infers the kind of every column.

    :param left: The left table of the join.
    :param right: The right table of the join.
    :param keys: The names of the columns to join on,
                 they must exist in both tables.
    :param right_suffix: Suffix for the left table columns
                         whose name is also in the right table.
    :param left_suffix: Suffix for the right table columns
                        whose name is also in the left table.
    """
    if not isinstance(left, Table) or not isinstance(right, Table):
        raise TypeError(
            "Only tables can be merged "
            f"({type(left).__name__} and {type(right).__name__} objects provided)"
        )
    if not is_sequence(keys):
        raise InvalidInputShape(
            f"Merge keys must be provided as a list ({type(keys).__name__} object provided)"
        )
    keys = list(keys)
    if not keys:
        raise InvalidInputShape("At least one column is required to merge tables")
    for key in keys:
        check_column_name(key)
        if key not in left.columns:
            raise ColumnNotFound(f"Column {key!r} not found in the left table to merge")
        if key not in right.columns:
            raise ColumnNotFound(f"Column {key!r} not found in the right table to merge")

    # Group the row indices by key combination, this allows
    # to find the matching rows without scanning the tables
    # for every combination.
    left_rows = _rows_by_combination(left, keys)
    right_rows = _rows_by_combination(right, keys)
    shared = [combo for combo in left_rows if combo in right_rows]

    left_data = left.to_columns()
    right_data = right.to_columns()

    # The layout of the result, one entry for each column:
    # (output name, table the values come from, source column name)
    layout: list[tuple[Any, str, Any]] = []
    for name in left_data:
        if name in keys:
            layout.append((name, "key", name))
        elif name in right_data:
            layout.append((str(name) + str(right_suffix), "left", name))
            layout.append((str(name) + str(left_suffix), "right", name))
        else:
            layout.append((name, "left", name))
    for name in right_data:
        if name not in left_data:
            layout.append((name, "right", name))

    result: dict[Any, list[Any]] = {out_name: [] for out_name, _, _ in layout}
    for combo in shared:
        key_values = {key: value for key, (_, value) in zip(keys, combo)}
        for i in left_rows[combo]:
            for j in right_rows[combo]:
                for out_name, side, name in layout:
                    if side == "key":
                        value = key_values[name]
                    elif side == "left":
                        value = left_data[name][i]
                    else:
                        value = right_data[name][j]
                    result[out_name].append(value)

    logger.debug(
        "Merged %d and %d rows on %r: %d shared combinations",
        left.nrows,
        right.nrows,
        keys,
        len(shared),
    )
    return Table(ColumnMap(result))


def _rows_by_combination(table: Table, keys: list[Any]) -> dict[tuple[Any, ...], list[int]]:
    """Map each non null combination of the keys to the rows holding it.

    The combinations are in the order they are first found in the table.
    Each value is paired with the kind of its column, so that
    values of different kinds never match, like ``1`` and ``1.0``.
    """
    data = table.to_columns()
    dtypes = table.dtypes
    kinds = [dtypes[key] for key in keys]
    rows: dict[tuple[Any, ...], list[int]] = {}
    for idx, combo in enumerate(zip(*(data[key] for key in keys))):
        if any(v is None or v == "" for v in combo):
            continue
        rows.setdefault(tuple(zip(kinds, combo)), []).append(idx)
    return rows
