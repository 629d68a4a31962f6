"""Change the shape of tables.

The same data can be laid out in *wide* format,
with one column for each category::

    Region, Jan, Feb
    North, 10, 20
    South, 30, 40

or in *long* format, with one row for each category and value::

    Region, Month, Sales
    North, Jan, 10
    North, Feb, 20
    South, Jan, 30
    South, Feb, 40

Spreadsheets reports are usually wide, as it's easier to read,
while long data is easier to filter, group and aggregate.

Melting turns wide data into long data and pivoting turns
long data into wide data.
This module also takes care of reconciling the columns
of multiple tables when stacking their rows one after the other.
"""

from typing import Any

from ..errors import PolicyError
from .inference import to_raw_string
from .keys import compose_key

__all__ = ("melt", "widen", "COLUMN_SELECTIONS", "select_columns", "stack")

COLUMN_SELECTIONS = ("inner", "outer", "left")


def melt(
    columns: list[str],
    rows: list[list],
    key_name: str,
    value_name: str,
    melt_columns: list[str],
) -> list[list[Any]]:
    """Unpivot columns into key/value rows.

    For every row and every melted column a new row is emitted
    with all the columns that were not melted, the name of the melted
    column as the key and its value.

    >>> melt(["ID", "Jan", "Feb"], [[1.0, 10.0, 20.0]], "Month", "Sales", ["Jan", "Feb"])
    [['ID', 'Month', 'Sales'], [1.0, 'Jan', 10.0], [1.0, 'Feb', 20.0]]
    """
    melted = set(melt_columns)
    kept_positions = [i for i, c in enumerate(columns) if c not in melted]
    melt_positions = [(c, columns.index(c)) for c in melt_columns]

    grid: list[list] = [[columns[i] for i in kept_positions] + [key_name, value_name]]
    for row in rows:
        kept_values = [row[i] for i in kept_positions]
        for name, position in melt_positions:
            grid.append([*kept_values, name, row[position]])
    return grid


def widen(
    index: str,
    row_keys: list[Any],
    column_keys: list[Any],
    lookup: dict[str, Any],
    separator: str,
    fill_value: Any = None,
) -> list[list[Any]]:
    """Assemble a wide grid from aggregated long data.

    ``lookup`` maps the composite key of each (row key, column key)
    pair to its aggregated value, pairs that are missing
    get ``fill_value``.

    >>> widen("Region", ["North"], ["Jan", "Feb"], {"North~~~Jan": 10.0}, "~~~")
    [['Region', 'Jan', 'Feb'], ['North', 10.0, None]]
    """
    grid: list[list] = [[index, *(to_raw_string(c) for c in column_keys)]]
    for row_key in row_keys:
        grid.append(
            [
                row_key,
                *(
                    lookup.get(compose_key((row_key, column_key), separator), fill_value)
                    for column_key in column_keys
                ),
            ]
        )
    return grid


def select_columns(column_sets: list[list[str]], how: str = "outer") -> list[str]:
    """Decide the columns of stacked tables.

    * ``inner``: only the columns shared by all tables, in the first table order.
    * ``outer``: all columns, first table columns first and then the new
      columns of every other table as they are met.
    * ``left``: the columns of the first table.

    >>> select_columns([["a", "b"], ["b", "c"]], "inner")
    ['b']
    >>> select_columns([["a", "b"], ["b", "c"]], "outer")
    ['a', 'b', 'c']
    """
    if how not in COLUMN_SELECTIONS:
        raise PolicyError(
            f"Invalid column selection {how!r}, use one of {', '.join(COLUMN_SELECTIONS)}"
        )
    first, *others = column_sets
    if how == "left":
        return list(first)
    if how == "inner":
        shared = set(first)
        for other in others:
            shared &= set(other)
        return [c for c in first if c in shared]

    selected = list(first)
    seen = set(first)
    for other in others:
        for c in other:
            if c not in seen:
                seen.add(c)
                selected.append(c)
    return selected


def stack(
    tables: list[tuple[list[str], list[list]]], columns: list[str]
) -> list[list[Any]]:
    """Stack the rows of multiple tables aligned to the given columns.

    Columns a table doesn't have are filled with ``None``.
    """
    grid: list[list] = [list(columns)]
    for table_columns, rows in tables:
        positions = [
            table_columns.index(c) if c in table_columns else None for c in columns
        ]
        for row in rows:
            grid.append([row[p] if p is not None else None for p in positions])
    return grid
