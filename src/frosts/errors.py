"""Errors raised by frosts.

Every error is raised as soon as a precondition is violated,
before any table is modified, and all of them inherit from
:class:`FrostError` so callers can catch any failure of the library
with a single ``except`` clause.

Each error also inherits from the closest builtin exception,
so code expecting a ``KeyError`` when looking up a missing column
or a ``ValueError`` for bad input keeps working.
"""

__all__ = (
    "FrostError",
    "StructuralError",
    "MembershipError",
    "ColumnTypeError",
    "DimensionMismatchError",
    "KeyCollisionError",
    "PolicyError",
    "KeyIncompleteError",
)


class FrostError(Exception):
    """Base class for all frosts errors."""


class StructuralError(FrostError, ValueError):
    """The input data does not have the shape of a table."""


class MembershipError(FrostError, KeyError):
    """A column referenced by name does not exist."""

    def __str__(self) -> str:
        # KeyError would quote the message.
        return str(self.args[0]) if self.args else ""


class ColumnTypeError(FrostError, TypeError):
    """A value or column does not have the type the operation requires."""


class DimensionMismatchError(FrostError, ValueError):
    """Provided values do not match the number of rows of the table."""


class KeyCollisionError(FrostError, ValueError):
    """A column name or key value clashes with an existing one or with the key separator."""


class PolicyError(FrostError, ValueError):
    """An option was given a value outside of the supported ones."""


class KeyIncompleteError(FrostError, LookupError):
    """Some values were not found in the reference key."""

    def __init__(self, message: str, missing: list) -> None:
        super().__init__(message)
        self.missing = missing
