"""Ready made predicates for filtering.

Filtering a column requires a function that receives the value
of the cell and returns whether the row has to be kept.
The most frequent ones are provided here:

>>> from frosts import DataFrame
>>> df = DataFrame([["Name", "Team"], ["Alice", "Red"], ["Bob", ""], ["Carl", "Blue"]])
>>> df.filter("Team", not_blank).get_column("Name")
['Alice', 'Carl']
>>> df.filter("Team", equal("Red")).get_column("Name")
['Alice']
"""

from typing import Any, Callable

from .inference import is_blank

__all__ = ("is_blank", "not_blank", "equal", "not_equal")


def not_blank(value: Any) -> bool:
    """Keep cells that have a value."""
    return not is_blank(value)


def equal(expected: Any) -> Callable[[Any], bool]:
    """Keep cells equal to ``expected``."""
    return lambda value: value == expected


def not_equal(expected: Any) -> Callable[[Any], bool]:
    """Keep cells different from ``expected``."""
    return lambda value: value != expected
