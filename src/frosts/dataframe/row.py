"""Typed access to the values of a single row."""

import math
from collections.abc import Mapping
from typing import Any, Iterator

from ..compute.inference import CellValue, NUMERIC_PATTERN, is_blank, to_raw_string
from ..errors import ColumnTypeError, MembershipError

__all__ = ("FrostRow",)


class FrostRow(Mapping):
    """Read only view over one row of a :class:`frosts.DataFrame`.

    Rows are stored as plain lists of values, the row view
    pairs them with the column positions of the table they
    belong to, so values can be looked up by column name::

        row["Salary"]

    Columns of a table might hold values of different kinds,
    callbacks that need a specific type can rely on the typed
    getters, which convert the value or raise
    :class:`frosts.errors.ColumnTypeError` when that is not possible.

    >>> from frosts import DataFrame
    >>> df = DataFrame([["Name", "Income"], ["Alice", "1000"]])
    >>> _, row = next(df.iterrows())
    >>> row.get_number("Income") * 2
    2000.0
    >>> row.get_string("Income")
    '1000'
    """

    __slots__ = ("_positions", "_values")

    def __init__(self, positions: dict[str, int], values: list[CellValue]) -> None:
        """
        :param positions: The position of each column in the values.
        :param values: The values of the row.
        """
        self._positions = positions
        self._values = values

    def __getitem__(self, column: str) -> CellValue:
        try:
            return self._values[self._positions[column]]
        except KeyError:
            raise MembershipError(
                f"Key {column!r} not found in row, available columns: {list(self._positions)}"
            ) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        values = ", ".join(f"{c!r}: {self[c]!r}" for c in self._positions)
        return f"FrostRow({{{values}}})"

    def get_number(self, column: str) -> float:
        """The value of a column as a float.

        Numeric text is parsed, blanks, booleans and any other
        text can't be used as numbers.
        """
        value = self[column]
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, str) and NUMERIC_PATTERN.fullmatch(value.strip()):
            return float(value)
        raise ColumnTypeError(f"Value {value!r} of column {column!r} is not a number")

    def get_string(self, column: str) -> str:
        """The value of a column as text, blanks are empty strings."""
        return to_raw_string(self[column])

    def get_boolean(self, column: str) -> bool:
        """The value of a column as a bool, text must be ``true`` or ``false``."""
        value = self[column]
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise ColumnTypeError(f"Value {value!r} of column {column!r} is not a boolean")

    def is_blank(self, column: str) -> bool:
        """Whether the column has no value in this row."""
        return is_blank(self[column])

    def to_dict(self) -> dict[str, CellValue]:
        """The row as a new ``{column: value}`` dictionary."""
        return dict(zip(self._positions, self._values))

    def numbers(self) -> dict[str, float]:
        """All values of the row as floats, ``NaN`` when not numeric."""
        result = {}
        for column in self._positions:
            try:
                result[column] = self.get_number(column)
            except ColumnTypeError:
                result[column] = math.nan
        return result

    def strings(self) -> dict[str, str]:
        """All values of the row as text."""
        return {column: self.get_string(column) for column in self._positions}
