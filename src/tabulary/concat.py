"""Concatenation of the rows of multiple tables.

>>> from tabulary import Table
>>> first = Table({"name": ["A"], "age": [10]})
>>> second = Table({"name": ["B"], "age": [20]})
>>> concat([first, second]).to_records()
[{'name': 'A', 'age': 10}, {'name': 'B', 'age': 20}]
"""

import logging
from collections.abc import Sequence

from .errors import InsufficientInputs, InvalidInputShape
from .table import Table

__all__ = ("concat",)

logger = logging.getLogger(__name__)


def concat(tables: Sequence[Table]) -> Table:
    """Combine the rows of multiple tables into a new table.

    All tables must have the same columns with the same kinds,
    rows are appended in the order tables are provided.
    None of the provided tables is modified.

    :param tables: A list of at least two tables.
    """
    if not isinstance(tables, (list, tuple)):
        raise InvalidInputShape(
            f"Tables to concatenate must be in a list ({type(tables).__name__} object provided)"
        )
    if len(tables) < 2:
        raise InsufficientInputs(
            f"At least two tables must be provided to concatenate ({len(tables)} provided)"
        )
    invalid = sorted({type(t).__name__ for t in tables if not isinstance(t, Table)})
    if invalid:
        raise TypeError(
            f"Objects to concatenate must be tables ({', '.join(invalid)} object(s) provided)"
        )

    first, *others = tables
    combined = first.copy()
    for table in others:
        combined.append(table, inplace=True)
    logger.debug("Concatenated %d tables into %d rows", len(tables), combined.nrows)
    return combined
