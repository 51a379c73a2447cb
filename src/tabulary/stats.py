"""Basic statistics over the values of a column.

The statistics are computed by the Arrow compute
kernels, the values are loaded in a :class:`pyarrow.Array`
and the relevant :mod:`pyarrow.compute` function is applied.

>>> mean([1, 2, 3, 4])
2.5
>>> round(std([2, 4, 4, 4, 5, 5, 7, 9]), 2)
2.0
"""

from collections.abc import Sequence

import pyarrow as pa
import pyarrow.compute as pc

from .errors import InvalidInputShape, TypeMismatch

__all__ = ("mean", "std")


def mean(values: Sequence[int | float]) -> float | None:
    """Compute the arithmetic mean of the values.

    Returns ``None`` when there are no values.
    """
    return pc.mean(_numeric_array(values)).as_py()


def std(values: Sequence[int | float]) -> float | None:
    """Compute the population standard deviation of the values.

    Returns ``None`` when there are no values.
    """
    return pc.stddev(_numeric_array(values), ddof=0).as_py()


def _numeric_array(values: Sequence[int | float]) -> pa.Array:
    if not isinstance(values, (list, tuple)):
        raise InvalidInputShape(
            f"Values must be provided as a list ({type(values).__name__} object provided)"
        )
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(
                "Values must only be integers or floats "
                f"({type(value).__name__} value {value!r} provided)"
            )
    return pa.array(values, type=pa.float64())
