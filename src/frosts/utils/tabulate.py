"""Format a DataFrame into a text table for print.

the `tabulate` function takes a :class:`frosts.DataFrame` and formats it into a text table.
It will truncate long strings, format non integer numbers to 2 decimal places,
and limit the number of rows to display.
It's used when a DataFrame is printed and by the ``frosts-summary`` command.

Example:

    >>> from frosts import DataFrame
    >>> df = DataFrame([
    ...     ["Product", "Quantity", "Price"],
    ...     ["Videogame", 8, 66.5],
    ...     ["Laptop", 8, 38.72],
    ...     ["Laptop", 7, 77.46],
    ... ])
    >>> print(tabulate(df))
    Product   | Quantity | Price
    --------- | -------- | -----
    Videogame | 8        | 66.50
    Laptop    | 8        | 38.72
    Laptop    | 7        | 77.46
"""

from typing import Any

from ..compute.inference import to_raw_string


def tabulate(df: Any, max_rows: int = 20) -> str:
    """Format a DataFrame into a text table.

    Will produce a string like::

        Product   | Quantity | Price | Total
        --------- | -------- | ----- | ------
        Videogame | 8        | 66.50 | 532
        Laptop    | 8        | 38.72 | 309.76
        Laptop    | 7        | 77.46 | 542.22
    """
    cols = df.columns
    rows = [[format_value(v) for v in row] for row in df.to_array(headers=False)[:max_rows]]

    colsizes = compute_max_colsize(cols, rows)
    lines = [
        maketablerow(cols, colsizes),
        maketablerow(["-"] * len(cols), colsizes, fillvalue="-"),
        *(maketablerow(row, colsizes) for row in rows),
    ]

    table = "\n".join(lines)
    if len(df) > max_rows:
        table += f"\n... and {len(df) - max_rows} more rows"
    return table


def compute_max_colsize(cols: list[str], rows: list[list[str]]) -> list[int]:
    """Compute the maximum size of each column, header included."""
    widths = [len(c) for c in cols]
    for row in rows:
        widths = [max(width, len(value)) for width, value in zip(widths, row)]
    return widths


def maketablerow(cols: list[str], colsizes: list[int], fillvalue: str = " ") -> str:
    """Make a table row with the given column sizes."""
    return " | ".join(col.ljust(size, fillvalue) for col, size in zip(cols, colsizes))


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    Integral numbers are printed without decimals, other numbers
    are rounded to 2 decimal places and long strings are truncated.
    """
    if isinstance(v, float) and v.is_integer():
        return to_raw_string(v)
    elif isinstance(v, float):
        return f"{v:.2f}"

    v = to_raw_string(v)
    if len(v) > 30:
        v = v[:27] + "..."
    return v
