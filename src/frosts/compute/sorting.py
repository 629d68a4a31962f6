"""Sort rows based on one or more columns.

Columns of a table might contain values of different types
(a string column could hold numbers and text) and blank cells,
which Python refuses to compare with each other.

Rows are compared column by column:

* blank cells and ``NaN`` always go after any other value,
  whatever the sort direction.
* values of the same kind compare naturally.
* values that can't be compared fall back to comparing
  their text representation.

Sorting is stable, rows that compare equal keep their order.
"""

import functools
import math
from typing import Any, Callable

from .inference import is_blank, to_raw_string

__all__ = ("compare_values", "row_sort_key")


def _sorts_last(value: Any) -> bool:
    return is_blank(value) or (isinstance(value, float) and math.isnan(value))


def compare_values(left: Any, right: Any) -> int:
    """Three way comparison of two cell values, ignoring blanks."""
    try:
        if left < right:
            return -1
        if left > right:
            return 1
        return 0
    except TypeError:
        left_text, right_text = to_raw_string(left), to_raw_string(right)
        return (left_text > right_text) - (left_text < right_text)


def row_sort_key(positions: list[int], ascending: list[bool]) -> Callable:
    """Build a sort key comparing rows on the given positions.

    :param positions: The indexes of the columns to sort by.
    :param ascending: For each column, whether to sort in ascending order.
    """

    def compare_rows(left: list, right: list) -> int:
        for position, asc in zip(positions, ascending):
            a, b = left[position], right[position]
            a_last, b_last = _sorts_last(a), _sorts_last(b)
            if a_last or b_last:
                if a_last and b_last:
                    continue
                return 1 if a_last else -1

            result = compare_values(a, b)
            if result:
                return result if asc else -result
        return 0

    return functools.cmp_to_key(compare_rows)
