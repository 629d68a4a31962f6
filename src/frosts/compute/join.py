"""Join two tables on equal keys.

Joins combine the rows of two tables whose values
are equal for a set of columns (the join keys).

The join implemented here is a *first match* join: each row of
the left table is combined with at most one row of the right table,
the first one (in the right table order) with the same keys.
Further matching rows are ignored, so joining never multiplies rows.
This fits the most frequent use of joins in spreadsheets,
looking up a value in a reference table (what ``VLOOKUP`` does),
but it's not a full relational join.

Three kinds of joins are supported:

* ``inner``: only the left rows that have a match.
* ``left``: all left rows, rows without a match have blank right columns.
* ``outer``: like ``left``, plus the right rows that matched no left row,
  with blank left columns.

To find matches a hash map from key values to the first right row
having them is built, which makes the join linear in the
size of the two tables.

>>> join = FirstMatchJoin(["id"], "inner")
>>> join.join(
...     ["id", "name"], [[1.0, "Alice"], [2.0, "Bob"], [3.0, "Charlie"]],
...     ["id", "age"], [[3.0, 25.0], [2.0, 30.0], [2.0, 99.0]],
... )
[['id', 'name', 'age'], [2.0, 'Bob', 30.0], [3.0, 'Charlie', 25.0]]
"""

from typing import Any

from ..errors import PolicyError

__all__ = ("FirstMatchJoin", "JOIN_TYPES")

JOIN_TYPES = ("inner", "left", "outer")


def _row_key(row: list, positions: list[int]) -> tuple:
    # Include the type so that 1.0, True and "1" never match each other.
    return tuple((type(row[i]), row[i]) for i in positions)


class FirstMatchJoin:
    """Join two tables combining each left row with its first right match.

    Columns of the result are the left columns followed by the right
    columns that are not join keys. When a non key column exists
    on both sides it appears once and, for matched rows, holds the
    value of the right table.
    """

    def __init__(self, on: list[str], how: str = "inner") -> None:
        """
        :param on: The columns whose values must be equal on both sides.
        :param how: One of ``inner``, ``left`` or ``outer``.
        """
        if how not in JOIN_TYPES:
            raise PolicyError(
                f"Invalid join type {how!r}, use one of {', '.join(JOIN_TYPES)}"
            )
        self.on = on
        self.how = how

    def __str__(self) -> str:
        return f"FirstMatchJoin(on={self.on}, how={self.how})"

    def join(
        self,
        left_columns: list[str],
        left_rows: list[list],
        right_columns: list[str],
        right_rows: list[list],
    ) -> list[list[Any]]:
        """Perform the join and return the result as a grid with headers."""
        left_keys = [left_columns.index(c) for c in self.on]
        right_keys = [right_columns.index(c) for c in self.on]

        columns = left_columns + [
            c for c in right_columns if c not in self.on and c not in left_columns
        ]
        # For each output column, where to find it in the left and right rows.
        from_left = [left_columns.index(c) if c in left_columns else None for c in columns]
        from_right = [
            right_columns.index(c) if c in right_columns else None for c in columns
        ]

        # Only the first right row for each key is retained.
        first_match: dict[tuple, list] = {}
        for right_row in right_rows:
            first_match.setdefault(_row_key(right_row, right_keys), right_row)

        grid: list[list] = [columns]
        matched_keys = set()
        for left_row in left_rows:
            key = _row_key(left_row, left_keys)
            right_row = first_match.get(key)
            if right_row is None:
                if self.how == "inner":
                    continue
                grid.append(
                    [left_row[li] if li is not None else None for li in from_left]
                )
                continue

            matched_keys.add(key)
            grid.append(
                [
                    right_row[ri] if ri is not None else left_row[li]
                    for li, ri in zip(from_left, from_right)
                ]
            )

        if self.how == "outer":
            for right_row in right_rows:
                if _row_key(right_row, right_keys) in matched_keys:
                    continue
                grid.append(
                    [right_row[ri] if ri is not None else None for ri in from_right]
                )
        return grid
