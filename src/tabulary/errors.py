"""Exceptions raised by Tabulary.

All the errors raised while building or manipulating a
:class:`tabulary.Table` derive from :class:`TableError`,
so callers interested in any failure of the engine can
catch that single class.

Errors are never recovered internally, when an operation
fails it raises and the table is left as it was before
the operation started.
"""

__all__ = (
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


class TableError(Exception):
    """Base class for all errors raised by Tabulary."""

    pass


class InvalidInputShape(TableError):
    """The data provided is neither a list of records nor a mapping of columns."""

    pass


class SchemaMismatch(TableError):
    """Records or tables do not share the same columns and types."""

    pass


class LengthMismatch(TableError):
    """A sequence does not have the number of rows that was expected."""

    pass


class InvalidColumnName(TableError):
    """A column name is not one of the supported scalar kinds."""

    pass


class ColumnNotFound(TableError):
    """The requested column does not exist in the table."""

    pass


class ColumnAlreadyExists(TableError):
    """A column with the same name is already present."""

    pass


class MixedTypeError(TableError):
    """A column contains values of more than one non-null kind."""

    pass


class UnsupportedValue(TableError):
    """A value is not of any of the kinds a column can hold."""

    pass


class InvalidMask(TableError):
    """A row mask is not a sequence of booleans."""

    pass


class MaskLengthMismatch(InvalidMask, LengthMismatch):
    """A row mask does not have one entry for each row of the table."""

    pass


class TypeMismatch(TableError):
    """A value does not have the kind of the column it is written to."""

    pass


class ConversionError(TableError):
    """A value could not be converted to the requested kind."""

    pass


class InsufficientInputs(TableError):
    """Not enough tables were provided to an operation combining tables."""

    pass
