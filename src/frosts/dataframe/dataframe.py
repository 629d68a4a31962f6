"""The DataFrame object itself."""

import json
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Iterator, Self

import pyarrow as pa

from ..compute.aggregate import (
    CountAggregation,
    GroupAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    StdDevAggregation,
    SumAggregation,
    get_aggregation,
    quantile,
)
from ..compute.inference import (
    BOOLEAN,
    NUMBER,
    STRING,
    CellValue,
    coerce_value,
    dedupe_headers,
    detect_column_type,
    is_blank,
    to_raw_string,
)
from ..compute.join import FirstMatchJoin
from ..compute.keys import check_key_column, check_key_values, compose_key
from ..compute.reshape import melt, select_columns, stack, widen
from ..compute.sorting import row_sort_key
from ..config import DEFAULT_CONFIG, FrostConfig
from ..errors import (
    ColumnTypeError,
    DimensionMismatchError,
    KeyCollisionError,
    KeyIncompleteError,
    MembershipError,
    PolicyError,
    StructuralError,
)
from ..utils import tabulate
from .row import FrostRow

__all__ = ("DataFrame", "combine_dfs")

logger = logging.getLogger(__name__)

FILL_METHODS = ("prev", "next", "value")
KEY_ERROR_POLICIES = ("raise", "warn", "return")
DESCRIBE_STATISTICS = (
    "Count",
    "Mean",
    "Standard Deviation",
    "Minimum",
    "1st Quartile",
    "Median",
    "3rd Quartile",
    "Maximum",
)


def _as_list(names: str | Iterable[str]) -> list[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


def _dedup_value(value: CellValue) -> CellValue:
    # 1 and 1.0 are the same number, they must not be distinct combinations.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _cells_equal(left: CellValue, right: CellValue) -> bool:
    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True
    return type(left) is type(right) and left == right


def _json_safe(value: CellValue) -> CellValue:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class DataFrame:
    """Data structure that handles data in rows and columns.

    A DataFrame is created from a grid of values, where the first
    row contains the headers and all the other rows contain the data,
    which is the shape of data read from spreadsheet ranges::

        [["Region", "Month", "Sales"],
         ["North", "Jan", 10],
         ["North", "Feb", 20]]

    Headers are trimmed and made unique, while the type of each
    column is detected (see :mod:`frosts.compute.inference`)
    and the values converted accordingly.

    DataFrames are never modified by their methods: each transformation
    builds a new grid and creates a new DataFrame from it, running
    header deduplication and type detection again. Some methods accept
    ``inplace=True``, in that case the new table replaces the content
    of the DataFrame the method was called on, which is then returned.

    >>> df = DataFrame([
    ...     ["Region", "Month", "Sales"],
    ...     ["North", "Jan", "10"],
    ...     ["North", "Feb", "20"],
    ...     ["South", "Jan", "30"],
    ... ])
    >>> df.dtypes
    {'Region': 'string', 'Month': 'string', 'Sales': 'number'}
    >>> df.group_by("Region", {"Sales": ["sum", "count"]}).to_array()
    [['Region', 'Sales_sum', 'Sales_count'], ['North', 30.0, 2.0], ['South', 30.0, 1.0]]
    """

    def __init__(
        self, data: list[list[CellValue]], config: FrostConfig | None = None
    ) -> None:
        """
        :param data: A grid of values, the first row holds the headers.
        :param config: The settings for this DataFrame and all the
                       DataFrames derived from it.
        """
        self.config = config or DEFAULT_CONFIG
        self._assign(*self._parse_grid(data, self.config))

    @staticmethod
    def _parse_grid(
        data: list[list[CellValue]], config: FrostConfig
    ) -> tuple[list[str], dict[str, str], list[list[CellValue]]]:
        if data is None or len(data) == 0:
            raise StructuralError("Unable to create a DataFrame from an empty grid")
        if isinstance(data[0], (str, bytes)) or not isinstance(data[0], Iterable):
            raise StructuralError("The first row of the grid must be a list of headers")

        columns = dedupe_headers(data[0])
        rows = [list(row) for row in data[1:]]
        for index, row in enumerate(rows, start=1):
            if len(row) != len(columns):
                raise StructuralError(
                    f"Row {index} has {len(row)} values while there are "
                    f"{len(columns)} headers"
                )

        dtypes = {}
        for position, column in enumerate(columns):
            values = [row[position] for row in rows]
            dtype = detect_column_type(values, config.sample_size)
            dtypes[column] = dtype
            if dtype != STRING:
                for row in rows:
                    row[position] = coerce_value(row[position], dtype)
        return columns, dtypes, rows

    def _assign(
        self, columns: list[str], dtypes: dict[str, str], rows: list[list[CellValue]]
    ) -> None:
        self._columns = columns
        self._dtypes = dtypes
        self._rows = rows
        self._positions = {c: i for i, c in enumerate(columns)}

    def _from_grid(self, grid: list[list[CellValue]]) -> Self:
        return self.__class__(grid, config=self.config)

    def _grid(
        self, columns: list[str] | None = None, rows: list[list[CellValue]] | None = None
    ) -> list[list[CellValue]]:
        columns = self._columns if columns is None else columns
        rows = self._rows if rows is None else rows
        return [list(columns), *rows]

    def _rebind(self, other: Self, inplace: bool) -> Self:
        """Replace the content of this DataFrame with ``other`` when ``inplace``."""
        if not inplace:
            return other
        logger.debug("Replacing DataFrame content in place with %r", other)
        self._assign(other._columns, other._dtypes, other._rows)
        self.config = other.config
        return self

    def _check_membership(self, *columns: str) -> None:
        for column in columns:
            if column not in self._positions:
                raise MembershipError(
                    f"Key {column!r} not found in DataFrame, available columns: {self._columns}"
                )

    def _check_numeric(self, column: str) -> list[CellValue]:
        self._check_membership(column)
        dtype = self._dtypes[column]
        if dtype != NUMBER:
            raise ColumnTypeError(
                f"Column {column!r} is not numeric, detected type: {dtype!r}"
            )
        return self._values(column)

    def _values(self, column: str) -> list[CellValue]:
        position = self._positions[column]
        return [row[position] for row in self._rows]

    def _to_values(self, values: Any, what: str) -> list[CellValue]:
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise DimensionMismatchError(
                f"{what} expects one value per row, got a single value {values!r}"
            )
        values = list(values)
        if len(values) != len(self._rows):
            raise DimensionMismatchError(
                f"DataFrame and input dimensions don't match, DataFrame has "
                f"{len(self._rows)} rows while {len(values)} values were provided"
            )
        return values

    # Properties and conversions

    @property
    def columns(self) -> list[str]:
        """The names of the columns, in order."""
        return list(self._columns)

    @property
    def dtypes(self) -> dict[str, str]:
        """The detected type of each column."""
        return dict(self._dtypes)

    @property
    def shape(self) -> tuple[int, int]:
        """Number of rows and columns."""
        return len(self._rows), len(self._columns)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"DataFrame(columns={self._columns}, rows={len(self._rows)})"

    def __str__(self) -> str:
        return tabulate.tabulate(self)

    def equals(self, other: "DataFrame") -> bool:
        """Whether two DataFrames have the same columns, types and values."""
        if not isinstance(other, DataFrame):
            return False
        if self._columns != other._columns or self._dtypes != other._dtypes:
            return False
        if len(self._rows) != len(other._rows):
            return False
        return all(
            _cells_equal(a, b)
            for left, right in zip(self._rows, other._rows)
            for a, b in zip(left, right)
        )

    def copy(self) -> Self:
        """Create an independent copy of the DataFrame."""
        return self._from_grid(self.to_array())

    def with_config(self, config: FrostConfig) -> Self:
        """Create a copy of the DataFrame that uses different settings."""
        return self.__class__(self.to_array(), config=config)

    def to_array(self, headers: bool = True) -> list[list[CellValue]]:
        """Convert the DataFrame to a grid of values.

        :param headers: Include the headers as the first row.
        """
        rows = [list(row) for row in self._rows]
        if headers:
            return [list(self._columns), *rows]
        return rows

    def to_records(self) -> list[dict[str, CellValue]]:
        """Convert the DataFrame to a list of ``{column: value}`` dictionaries."""
        return [dict(zip(self._columns, row)) for row in self._rows]

    def to_json(self, headers: bool = True) -> str:
        """Convert the DataFrame to a JSON array of arrays.

        Values that JSON can't represent, like ``NaN``, become ``null``.
        """
        return json.dumps(
            [[_json_safe(v) for v in row] for row in self.to_array(headers)]
        )

    def to_csv(self, headers: bool = True, separator: str = ",") -> str:
        """Convert the DataFrame to delimited text, one line per row."""
        return "\n".join(
            separator.join(to_raw_string(v) for v in row)
            for row in self.to_array(headers)
        )

    def to_arrow(self) -> pa.Table:
        """Convert the DataFrame to a :class:`pyarrow.Table`.

        Number columns become ``float64``, boolean columns ``bool``
        and any other column is converted to text.
        """
        arrays = {}
        for column in self._columns:
            values = self._values(column)
            dtype = self._dtypes[column]
            if dtype == NUMBER:
                arrays[column] = pa.array(values, type=pa.float64())
            elif dtype == BOOLEAN:
                arrays[column] = pa.array(values, type=pa.bool_())
            else:
                arrays[column] = pa.array(
                    [None if v is None else to_raw_string(v) for v in values],
                    type=pa.string(),
                )
        return pa.table(arrays)

    @classmethod
    def from_arrow(
        cls, table: pa.Table | pa.RecordBatch, config: FrostConfig | None = None
    ) -> Self:
        """Create a DataFrame from a :class:`pyarrow.Table` or :class:`pyarrow.RecordBatch`."""
        data = [table.column(i).to_pylist() for i in range(table.num_columns)]
        rows = [list(values) for values in zip(*data)]
        return cls([list(table.column_names), *rows], config=config)

    # Columns

    def get_column(self, column: str) -> list[CellValue]:
        """The values of a column."""
        self._check_membership(column)
        return self._values(column)

    def get_columns(self, *columns: str) -> Self:
        """Create a DataFrame with only the given columns, in the given order."""
        self._check_membership(*columns)
        positions = [self._positions[c] for c in columns]
        return self._from_grid(
            self._grid(columns, [[row[p] for p in positions] for row in self._rows])
        )

    def get_numeric_columns(self) -> list[str]:
        """The names of the columns detected as numbers."""
        return [c for c in self._columns if self._dtypes[c] == NUMBER]

    def add_column(
        self, column: str, values: Iterable[CellValue] | CellValue, inplace: bool = False
    ) -> Self:
        """Append a new column.

        :param column: The name of the new column, must not exist yet.
        :param values: One value per row, or a single value for all rows.
        :param inplace: Replace the content of this DataFrame with the result.
        """
        if column in self._positions:
            raise KeyCollisionError(f"Key {column!r} already in DataFrame")
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            values = [values] * len(self._rows)
        else:
            values = self._to_values(values, "add_column")

        rows = [[*row, value] for row, value in zip(self._rows, values)]
        grid = self._grid([*self._columns, column], rows)
        return self._rebind(self._from_grid(grid), inplace)

    def add_formula_column(
        self, column: str, formula: str, inplace: bool = False
    ) -> Self:
        """Append a column with the same formula text in every row.

        Formulas like ``=[@Income] * 0.3`` are not evaluated,
        it's up to the spreadsheet that receives the data to compute them.
        """
        return self.add_column(column, [formula] * len(self._rows), inplace=inplace)

    def set_column(
        self, column: str, values: Iterable[CellValue], inplace: bool = False
    ) -> Self:
        """Replace the values of a column, or add it when it doesn't exist.

        The type of the column is detected from the new values only.
        """
        values = self._to_values(values, "set_column")
        if column in self._positions:
            position = self._positions[column]
            columns = self._columns
            rows = []
            for row, value in zip(self._rows, values):
                row = list(row)
                row[position] = value
                rows.append(row)
        else:
            columns = [*self._columns, column]
            rows = [[*row, value] for row, value in zip(self._rows, values)]
        return self._rebind(self._from_grid(self._grid(columns, rows)), inplace)

    def replace_column(
        self,
        column: str,
        func: Callable[[CellValue, int], CellValue],
        inplace: bool = False,
    ) -> Self:
        """Transform the values of an existing column.

        :param func: Invoked as ``func(value, row_index)`` for each row,
                     returns the new value.
        """
        self._check_membership(column)
        values = [func(value, index) for index, value in enumerate(self._values(column))]
        return self.set_column(column, values, inplace=inplace)

    def rename(self, columns: Mapping[str, str], inplace: bool = False) -> Self:
        """Rename columns according to a ``{old_name: new_name}`` mapping.

        Columns not in the mapping keep their name.
        """
        self._check_membership(*columns)
        new_columns = [columns.get(c, c) for c in self._columns]
        return self._rebind(self._from_grid(self._grid(new_columns)), inplace)

    def drop(self, *columns: str, inplace: bool = False) -> Self:
        """Remove the given columns."""
        self._check_membership(*columns)
        dropped = set(columns)
        positions = [i for i, c in enumerate(self._columns) if c not in dropped]
        grid = self._grid(
            [self._columns[i] for i in positions],
            [[row[i] for i in positions] for row in self._rows],
        )
        return self._rebind(self._from_grid(grid), inplace)

    def fill_na(
        self,
        columns: str | list[str],
        method: str,
        value: CellValue = None,
    ) -> Self:
        """Fill the blank cells of one or more columns.

        :param columns: A column name, a list of names or ``"ALL"``
                        for all the columns.
        :param method: How blanks are filled:

            * ``prev`` copies the closest non blank value above.
            * ``next`` copies the closest non blank value below.
            * ``value`` sets the provided ``value``.

        :param value: The value used by the ``value`` method.

        Blanks that have no value to copy are left as they are
        and reported in the logs.
        """
        if method not in FILL_METHODS:
            raise PolicyError(
                f"fill_na method must be one of {', '.join(FILL_METHODS)}, got {method!r}"
            )
        if method == "value" and value is None:
            raise PolicyError('fill_na method "value" requires a value argument')
        if columns == "ALL":
            columns = list(self._columns)
        columns = _as_list(columns)
        self._check_membership(*columns)

        rows = [list(row) for row in self._rows]
        for column in columns:
            position = self._positions[column]
            if method == "prev":
                self._fill_forward(column, position, rows)
            elif method == "next":
                self._fill_backward(column, position, rows)
            else:
                for row in rows:
                    if is_blank(row[position]):
                        row[position] = value
        return self._from_grid(self._grid(rows=rows))

    @staticmethod
    def _fill_forward(column: str, position: int, rows: list[list]) -> None:
        fill_value = None
        missed = []
        for index, row in enumerate(rows):
            if not is_blank(row[position]):
                fill_value = row[position]
            elif fill_value is None:
                missed.append(index)
            else:
                row[position] = fill_value
        if missed:
            logger.warning(
                "Not all values of %r were replaced (no previous value to assign), "
                "missed values in rows: %s",
                column,
                missed,
            )

    @staticmethod
    def _fill_backward(column: str, position: int, rows: list[list]) -> None:
        pending = []
        for index, row in enumerate(rows):
            if is_blank(row[position]):
                pending.append(index)
                continue
            for pending_index in pending:
                rows[pending_index][position] = row[position]
            pending.clear()
        if pending:
            logger.warning(
                "Not all values of %r were replaced (no following value to assign), "
                "missed values in rows: %s",
                column,
                pending,
            )

    # Rows

    def iterrows(self) -> Iterator[tuple[int, FrostRow]]:
        """Iterate over ``(index, row)`` pairs."""
        for index, row in enumerate(self._rows):
            yield index, FrostRow(self._positions, row)

    def apply(self, func: Callable[[FrostRow], Any]) -> list[Any]:
        """Invoke ``func`` for each row and collect the results."""
        return [func(row) for _, row in self.iterrows()]

    def apply_numeric(self, func: Callable[[dict[str, float]], float]) -> list[float]:
        """Like :meth:`apply` with rows provided as ``{column: float}``.

        Values that aren't numbers are provided as ``NaN``.
        """
        return [func(row.numbers()) for _, row in self.iterrows()]

    def apply_string(self, func: Callable[[dict[str, str]], str]) -> list[str]:
        """Like :meth:`apply` with rows provided as ``{column: text}``."""
        return [func(row.strings()) for _, row in self.iterrows()]

    def map_cols_numeric(
        self, func: Callable[[list[float]], float], *columns: str
    ) -> list[float]:
        """Invoke ``func`` with the values of numeric columns for each row.

        >>> df = DataFrame([["a", "b"], [1, 2], [3, 4]])
        >>> df.map_cols_numeric(lambda values: values[0] * values[1], "a", "b")
        [2.0, 12.0]
        """
        for column in columns:
            self._check_numeric(column)
        positions = [self._positions[c] for c in columns]
        return [
            func([math.nan if row[p] is None else row[p] for p in positions])
            for row in self._rows
        ]

    def filter(
        self,
        column: str,
        predicate: Callable[[CellValue], bool],
        inplace: bool = False,
    ) -> Self:
        """Keep only the rows where ``predicate(value)`` is true for the column."""
        self._check_membership(column)
        position = self._positions[column]
        rows = [row for row in self._rows if predicate(row[position])]
        return self._rebind(self._from_grid(self._grid(rows=rows)), inplace)

    def query(self, condition: Callable[[FrostRow], bool]) -> Self:
        """Keep only the rows where ``condition(row)`` is true.

        >>> df = DataFrame([["a", "b"], [1, 2], [3, 1]])
        >>> df.query(lambda row: row["a"] > row["b"]).to_array()
        [['a', 'b'], [3.0, 1.0]]
        """
        rows = [row for row in self._rows if condition(FrostRow(self._positions, row))]
        return self._from_grid(self._grid(rows=rows))

    def is_in(self, column: str, values: Iterable[CellValue]) -> Self:
        """Keep only the rows whose value in ``column`` is one of ``values``."""
        self._check_membership(column)
        accepted = set(values)
        position = self._positions[column]
        return self._from_grid(
            self._grid(rows=[row for row in self._rows if row[position] in accepted])
        )

    isin = is_in

    def isnt_in(self, column: str, values: Iterable[CellValue]) -> Self:
        """Keep only the rows whose value in ``column`` is not one of ``values``."""
        self._check_membership(column)
        rejected = set(values)
        position = self._positions[column]
        return self._from_grid(
            self._grid(rows=[row for row in self._rows if row[position] not in rejected])
        )

    def unique(self, *columns: str) -> Self:
        """The distinct combinations of values of the given columns.

        Combinations are kept in order of first appearance.
        When no column is provided all columns are considered.
        """
        columns = columns or tuple(self._columns)
        self._check_membership(*columns)
        positions = [self._positions[c] for c in columns]

        seen = set()
        combinations = []
        for row in self._rows:
            combination = [row[p] for p in positions]
            key = json.dumps([_dedup_value(v) for v in combination])
            if key not in seen:
                seen.add(key)
                combinations.append(combination)
        return self._from_grid(self._grid(list(columns), combinations))

    def drop_rows(self, *indexes: int) -> Self:
        """Remove rows by position, negative positions count from the end."""
        total = len(self._rows)
        to_drop = set()
        for index in indexes:
            if index < 0:
                adjusted = total + index
                if adjusted < 0:
                    raise DimensionMismatchError(
                        f"Not enough rows in DataFrame, got index {index} "
                        f"while DataFrame has {total} rows"
                    )
                index = adjusted
            to_drop.add(index)
        rows = [row for i, row in enumerate(self._rows) if i not in to_drop]
        return self._from_grid(self._grid(rows=rows))

    def head(self, n_rows: int = 10) -> Self:
        """The first ``n_rows`` rows.

        When the DataFrame has no more than ``n_rows`` rows
        the DataFrame itself is returned, not a copy.
        """
        if len(self._rows) <= n_rows:
            return self
        return self._from_grid(self._grid(rows=self._rows[:n_rows]))

    def tail(self, n_rows: int = 10) -> Self:
        """The last ``n_rows`` rows.

        When the DataFrame has no more than ``n_rows`` rows
        the DataFrame itself is returned, not a copy.
        """
        if len(self._rows) <= n_rows:
            return self
        return self._from_grid(self._grid(rows=self._rows[len(self._rows) - n_rows :]))

    def sort_by(
        self,
        columns: str | list[str] | Mapping[str, bool],
        ascending: bool | list[bool] = True,
        inplace: bool = False,
    ) -> Self:
        """Sort the rows by one or more columns.

        :param columns: The columns to sort by, can also be a
                        ``{column: ascending}`` mapping.
        :param ascending: The direction for all columns or for each one of them.
        :param inplace: Replace the content of this DataFrame with the result.

        >>> df = DataFrame([["name", "age"], ["Bob", 30], ["Alice", 25], ["Carl", 30]])
        >>> df.sort_by({"age": False, "name": True}).get_column("name")
        ['Bob', 'Carl', 'Alice']
        """
        if isinstance(columns, Mapping):
            ascending = list(columns.values())
            columns = list(columns.keys())
        columns = _as_list(columns)
        if isinstance(ascending, bool):
            ascending = [ascending] * len(columns)
        elif len(ascending) == 1:
            ascending = list(ascending) * len(columns)
        if len(ascending) != len(columns):
            raise PolicyError("Columns and ascending must have the same length")
        self._check_membership(*columns)

        positions = [self._positions[c] for c in columns]
        rows = sorted(self._rows, key=row_sort_key(positions, list(ascending)))
        return self._rebind(self._from_grid(self._grid(rows=rows)), inplace)

    # Combining DataFrames

    def merge(
        self, other: "DataFrame", on: str | list[str], how: str = "inner"
    ) -> Self:
        """Join with another DataFrame on equal values of the ``on`` columns.

        Each row is combined with the *first* matching row of ``other``,
        further matches are ignored (see :mod:`frosts.compute.join`).

        :param other: The DataFrame to join with.
        :param on: The columns that must have equal values, present in both.
        :param how: ``inner``, ``left`` or ``outer``.
        """
        on = _as_list(on)
        join = FirstMatchJoin(on, how)
        self._check_membership(*on)
        other._check_membership(*on)
        return self._from_grid(
            join.join(self._columns, self._rows, other._columns, other._rows)
        )

    def concat(self, other: "DataFrame", how: str = "outer") -> Self:
        """Stack the rows of another DataFrame after the rows of this one.

        :param how: Which columns to keep: ``inner`` (shared columns),
                    ``outer`` (all columns) or ``left`` (columns of this DataFrame).
                    Missing values are filled with ``None``.
        """
        return self.concat_all(other, how=how)

    def concat_all(self, *others: "DataFrame", how: str = "outer") -> Self:
        """Stack the rows of multiple DataFrames after the rows of this one."""
        tables = [self, *others]
        columns = select_columns([t._columns for t in tables], how)
        return self._from_grid(stack([(t._columns, t._rows) for t in tables], columns))

    def validate_key(
        self,
        key: "DataFrame",
        on: str | tuple[str, str],
        errors: str = "raise",
    ) -> list[CellValue]:
        """Find the values of a column that are missing from a reference column.

        This is a referential integrity check, typically done
        before merging with ``key`` to know which rows won't match.

        :param key: The DataFrame with the reference values.
        :param on: The column name on both DataFrames, or
                   a ``(column, key_column)`` pair.
        :param errors: What to do when values are missing:
                       ``raise`` a :class:`frosts.errors.KeyIncompleteError`,
                       ``warn`` in the logs, or just ``return`` them.
        :returns: The values not found in the reference column.
        """
        if errors not in KEY_ERROR_POLICIES:
            raise PolicyError(
                f"errors must be one of {', '.join(KEY_ERROR_POLICIES)}, got {errors!r}"
            )
        left_on, right_on = (on, on) if isinstance(on, str) else on
        self._check_membership(left_on)
        key._check_membership(right_on)

        reference = {(type(v), v) for v in key._values(right_on)}
        missing = [v for v in self._values(left_on) if (type(v), v) not in reference]
        if missing and errors == "raise":
            raise KeyIncompleteError(
                f"The following values were not found in the key column {right_on!r}: {missing}",
                missing,
            )
        if missing and errors == "warn":
            logger.warning(
                "The following values were not found in the key column %r: %s",
                right_on,
                missing,
            )
        return missing

    # Grouping and reshaping

    def group_by(
        self,
        keys: str | list[str],
        aggregations: Mapping[str, str | list[str]] | str,
        agg: str | list[str] | None = None,
    ) -> Self:
        """Group rows by the ``keys`` columns and compute aggregations.

        :param keys: The column or columns to group by.
        :param aggregations: For each column to aggregate, one or more
                             of ``sum``, ``mean``, ``count``, ``min``,
                             ``max`` and ``std_dev``.
                             Use ``"all"`` to aggregate every numeric
                             column that is not a key.
        :param agg: The aggregation or aggregations computed for each
                    column when ``aggregations`` is ``"all"``.

        The result has the key columns followed by one
        ``<column>_<aggregation>`` column for each aggregation.
        Keys are joined with the configured separator to identify groups,
        so key columns can't contain it, neither in their name nor in their values.

        >>> df = DataFrame([["k", "a", "b"], ["x", 1, 2], ["x", 3, 4], ["y", 5, 6]])
        >>> df.group_by("k", "all", "sum").to_array()
        [['k', 'a_sum', 'b_sum'], ['x', 4.0, 6.0], ['y', 5.0, 6.0]]
        """
        keys = _as_list(keys)
        self._check_membership(*keys)
        for key in keys:
            check_key_column(key, self.config.separator)

        if isinstance(aggregations, str):
            if aggregations != "all":
                raise PolicyError(
                    f'aggregations must be a mapping or "all", got {aggregations!r}'
                )
            if agg is None:
                raise PolicyError('group_by on "all" columns requires an agg argument')
            aggregations = {
                c: agg for c in self.get_numeric_columns() if c not in keys
            }

        requested = []
        for column, names in aggregations.items():
            self._check_membership(column)
            for name in _as_list(names):
                aggregation = get_aggregation(name, column)
                if aggregation.requires_numeric:
                    self._check_numeric(column)
                requested.append(aggregation)

        for key in keys:
            check_key_values(key, self._values(key), self.config.separator)

        grouping = GroupAggregation(keys, requested, self.config.separator)
        return self._from_grid(grouping.compute(self._columns, self._rows))

    def pivot(
        self,
        index: str,
        columns: str,
        values: str,
        agg: str = "count",
        fill_value: CellValue = None,
    ) -> Self:
        """Reshape long data into a wide table.

        :param index: The column whose unique values become the rows.
        :param columns: The column whose unique values become the columns.
        :param values: The column to aggregate in each cell.
        :param agg: The aggregation computed for each cell.
        :param fill_value: The value for combinations that have no rows.

        >>> df = DataFrame([
        ...     ["Region", "Month", "Sales"],
        ...     ["North", "Jan", 10], ["North", "Feb", 20], ["South", "Jan", 30],
        ... ])
        >>> df.pivot("Region", "Month", "Sales", "sum").to_array()
        [['Region', 'Jan', 'Feb'], ['North', 10.0, 20.0], ['South', 30.0, None]]
        """
        self._check_membership(index, columns, values)
        grouped = self.group_by([index, columns], {values: agg})

        index_values, column_values, aggregated = (
            grouped._values(c) for c in grouped._columns
        )
        lookup = {
            compose_key((row_key, column_key), self.config.separator): value
            for row_key, column_key, value in zip(index_values, column_values, aggregated)
        }
        grid = widen(
            index,
            grouped.unique(index)._values(index),
            grouped.unique(columns)._values(columns),
            lookup,
            self.config.separator,
            fill_value,
        )
        return self._from_grid(grid)

    def melt(self, key_column: str, value_column: str, *columns: str) -> Self:
        """Unpivot the given columns into key/value rows.

        :param key_column: Name of the new column holding the melted column names.
        :param value_column: Name of the new column holding the melted values.
        :param columns: The columns to melt, all others are kept on each row.
        """
        self._check_membership(*columns)
        return self._from_grid(
            melt(self._columns, self._rows, key_column, value_column, list(columns))
        )

    def melt_except(self, key_column: str, value_column: str, *keep: str) -> Self:
        """Unpivot all the columns except the ``keep`` ones.

        >>> df = DataFrame([["ID", "Jan", "Feb"], [1, 10, 20]])
        >>> df.melt_except("Month", "Sales", "ID").to_array()
        [['ID', 'Month', 'Sales'], [1.0, 'Jan', 10.0], [1.0, 'Feb', 20.0]]
        """
        self._check_membership(*keep)
        kept = set(keep)
        return self.melt(
            key_column, value_column, *(c for c in self._columns if c not in kept)
        )

    def encode_headers(
        self,
        column: str,
        is_header_row: Callable[[FrostRow], bool],
        extract_value: Callable[[FrostRow], CellValue],
        keep_headers: bool = False,
    ) -> Self:
        """Turn section header rows into a column.

        Spreadsheet reports frequently split data in sections,
        each starting with a row acting as header for the rows below::

            Product          | Jan
            Region: North    |
            Apples           | 10
            Region: South    |
            Apples           | 20

        Rows are scanned top to bottom, each time ``is_header_row``
        is true the value returned by ``extract_value`` becomes the
        current value, which is stored in ``column`` for every row.

        :param column: The column receiving the header values.
        :param is_header_row: Detects the header rows.
        :param extract_value: Extracts the value from a header row.
        :param keep_headers: Keep the header rows in the result.
        """
        current = ""
        series = []
        header_rows = set()
        for index, row in self.iterrows():
            if is_header_row(row):
                current = extract_value(row)
                header_rows.add(index)
            series.append(current)

        if column in self._positions:
            position = self._positions[column]
            columns = self._columns
        else:
            position = len(self._columns)
            columns = [*self._columns, column]

        rows = []
        for index, (row, value) in enumerate(zip(self._rows, series)):
            if index in header_rows and not keep_headers:
                continue
            row = list(row)
            if position == len(row):
                row.append(value)
            else:
                row[position] = value
            rows.append(row)
        return self._from_grid(self._grid(columns, rows))

    # Statistics

    def count(self, column: str) -> int:
        """Number of non blank values in a column."""
        self._check_membership(column)
        return CountAggregation(column).compute(self._values(column))

    def sum(self, column: str) -> float:
        """Sum of a numeric column."""
        return SumAggregation(column).compute(self._check_numeric(column))

    def mean(self, column: str) -> float:
        """Mean of a numeric column."""
        return MeanAggregation(column).compute(self._check_numeric(column))

    average = mean

    def min(self, column: str) -> float:
        """Minimum of a numeric column."""
        return MinAggregation(column).compute(self._check_numeric(column))

    def max(self, column: str) -> float:
        """Maximum of a numeric column."""
        return MaxAggregation(column).compute(self._check_numeric(column))

    def std_dev(self, column: str, bessel: bool = True) -> float:
        """Standard deviation of a numeric column.

        :param bessel: Compute the sample standard deviation (divide by ``n - 1``),
                       otherwise the population one (divide by ``n``).
        """
        return StdDevAggregation(column, bessel=bessel).compute(
            self._check_numeric(column)
        )

    def quantile(self, column: str, q: float) -> float:
        """The ``q``-th percentile (0 to 100) of a numeric column."""
        return quantile(self._check_numeric(column), q)

    def median(self, column: str) -> float:
        """Median of a numeric column."""
        return self.quantile(column, 50)

    def describe(self) -> Self:
        """Summary statistics of all the numeric columns, one row per column."""
        rows = []
        for column in self.get_numeric_columns():
            rows.append(
                [
                    column,
                    self.count(column),
                    self.mean(column),
                    self.std_dev(column),
                    self.min(column),
                    self.quantile(column, 25),
                    self.median(column),
                    self.quantile(column, 75),
                    self.max(column),
                ]
            )
        return self._from_grid([["Column", *DESCRIBE_STATISTICS], *rows])


def combine_dfs(dfs: list[DataFrame], how: str = "outer") -> DataFrame:
    """Stack the rows of multiple DataFrames.

    See :meth:`DataFrame.concat` for the meaning of ``how``.
    """
    if not dfs:
        raise StructuralError("Provide at least one DataFrame to combine")
    if len(dfs) == 1:
        return dfs[0]
    first, *others = dfs
    return first.concat_all(*others, how=how)
