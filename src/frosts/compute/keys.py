"""Composite keys for grouping on multiple columns.

Grouping and pivoting need to find all the rows
that share the same values for a set of key columns.
The simplest way to do so is a hash map whose key
identifies the combination of values.

The key is built by rendering each value as text
and joining them with a separator::

    ("New York", "Shop A") -> "New York~~~Shop A"

This makes any combination of keys usable
as a single dictionary key, and the values
can be recovered by splitting the key again.

It only works as long as the separator never appears
in the key values themselves, otherwise splitting
would produce the wrong number of values. For this reason
key columns are checked before any grouping happens.

>>> key = compose_key(["New York", 3.0], "~~~")
>>> key
'New York~~~3'
>>> split_key(key, "~~~")
['New York', '3']
"""

from typing import Any, Iterable

from ..errors import KeyCollisionError
from .inference import to_raw_string

__all__ = ("compose_key", "split_key", "check_key_column", "check_key_values")


def compose_key(values: Iterable[Any], separator: str) -> str:
    """Join the values of a row key into a single string."""
    return separator.join(to_raw_string(v) for v in values)


def split_key(key: str, separator: str) -> list[str]:
    """Split a composite key back into its values (as text)."""
    return key.split(separator)


def check_key_column(name: str, separator: str) -> None:
    """Make sure a column can be used as a grouping key.

    Column names containing the separator are rejected, as they
    signal that the separator is not safe for the data at hand.
    """
    if separator in name:
        raise KeyCollisionError(
            f"Key column {name!r} contains the internal separator {separator!r}, "
            "rename the column or configure a different separator."
        )


def check_key_values(name: str, values: Iterable[Any], separator: str) -> None:
    """Make sure no value of a key column contains the separator."""
    for value in values:
        if separator in to_raw_string(value):
            raise KeyCollisionError(
                f"Value {value!r} of key column {name!r} contains the internal "
                f"separator {separator!r}, configure a different separator."
            )
