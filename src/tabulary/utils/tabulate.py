"""Format tables into text for print.

the `tabulate` function takes a :class:`tabulary.Table` and formats it into a text table.
It will truncate long strings, format floats to 2 decimal places, and limit the number of rows to display.
The function is used by the Table itself to provide its textual representation.

Example:

    >>> from tabulary import Table
    >>> data = {
    ...     "Product": ["Videogame", "Laptop", "Laptop"],
    ...     "Quantity": [8, 8, None],
    ...     "Price": [66.5, 38.72, 77.46],
    ... }
    >>> print(tabulate(Table(data)))
    Product   | Quantity | Price
    --------- | -------- | -----
    Videogame | 8        | 66.50
    Laptop    | 8        | 38.72
    Laptop    |          | 77.46
    >>> print(format_dtypes(Table(data)))
    Product   text
    Quantity  integer
    Price     float
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..table import Table


def tabulate(table: "Table", max_rows: int = 20) -> str:
    """Format a Table into a text table.

    Will produce a string like::

        Product   | Quantity | Price | Total
        --------- | -------- | ----- | ------
        Videogame | 8        | 66.50 | 532.00
        Laptop    | 8        | 38.72 | 309.76
        Laptop    | 7        | 77.46 | 542.22
    """
    cols = [str(c) for c in table.columns]
    rows = [
        [format_value(v) for v in record.values()]
        for record in table.to_records()[:max_rows]
    ]

    colsizes = compute_max_colsize(cols, rows)
    header = [maketablerow(cols, colsizes=colsizes)]
    separator = [maketablerow(["-"] * len(cols), colsizes=colsizes, fillvalue="-")]
    textrows = [maketablerow(row, colsizes=colsizes) for row in rows]

    text = "\n".join(header + separator + textrows)
    if table.nrows > max_rows:
        text += f"\n... and {table.nrows - max_rows} more rows"
    return text


def format_dtypes(table: "Table") -> str:
    """Format the kind of each column of a Table, one column per line."""
    names = [str(c) for c in table.columns]
    width = max([len(n) for n in names], default=0) + 2
    return "\n".join(
        name.ljust(width) + kind.value
        for name, kind in zip(names, table.dtypes.values())
    )


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column in a table."""
    return [
        max([len(row[colidx]) for row in rows] + [len(cols[colidx])])
        for colidx, _ in enumerate(cols)
    ]


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(
        [col.ljust(colsizes[idx], fillvalue) for idx, col in enumerate(cols)]
    )


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    This function will format floats to 2 decimal places,
    print nulls as empty cells and truncate long strings.
    """
    if v is None:
        return ""
    elif isinstance(v, float):
        return f"{v:.2f}"

    v = str(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
