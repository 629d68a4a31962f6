"""Aggregations and grouping.

Frequently when analysing data is necessary
to compute statistics like the min, max, average, etc...
of the data stored in a table.

Aggregations are usually computed for groups of rows,
grouping the data by a set of key columns and computing
the aggregations for each group.

For example, given the following data::

    city, shop, n_employees
    New York, Shop A, 10
    New York, Shop B, 15
    Los Angeles, Shop C, 8
    Los Angeles, Shop D, 12
    New York, Shop E, 20

We could group by city and compute the sum of the employees
to get::

    city, n_employees_sum
    New York, 45
    Los Angeles, 20

Rows are grouped through a hash map keyed by the
composite key of the group (see :mod:`frosts.compute.keys`),
numeric aggregations are then computed by :mod:`pyarrow.compute`
over the ``float64`` values of each group.

>>> grouping = GroupAggregation(["city"], [SumAggregation("n_employees")], "~~~")
>>> grouping.compute(
...     ["city", "shop", "n_employees"],
...     [["New York", "Shop A", 10.0], ["Los Angeles", "Shop C", 8.0], ["New York", "Shop B", 15.0]],
... )
[['city', 'n_employees_sum'], ['New York', 25.0], ['Los Angeles', 8.0]]
"""

import abc
import math
from typing import Any

import pyarrow as pa
import pyarrow.compute as pc

from ..errors import PolicyError
from .inference import is_blank
from .keys import compose_key, split_key

__all__ = (
    "Aggregation",
    "SumAggregation",
    "MeanAggregation",
    "CountAggregation",
    "MinAggregation",
    "MaxAggregation",
    "StdDevAggregation",
    "AGGREGATIONS",
    "get_aggregation",
    "GroupAggregation",
    "numeric_array",
    "quantile",
    "median",
)


def numeric_array(values: list[Any]) -> pa.Array:
    """Collect the numeric values of a column into a ``float64`` array.

    Blank cells and any value that isn't a number are left out.
    ``NaN`` values are numbers, so they are kept and propagate.
    """
    return pa.array(
        [
            float(v)
            for v in values
            if isinstance(v, (int, float)) and not isinstance(v, bool)
        ],
        type=pa.float64(),
    )


def _as_float(scalar: pa.Scalar) -> float:
    value = scalar.as_py()
    return math.nan if value is None else value


def _has_nan(data: pa.Array) -> bool:
    # pc.min, pc.max and pc.quantile skip NaN, which must propagate instead.
    return len(data) > 0 and bool(pc.any(pc.is_nan(data)).as_py())


class Aggregation(abc.ABC):
    """Base class for aggregations.

    Every aggregation is bound to the column it aggregates
    and knows how to reduce the values of that column
    for a group of rows to a single value.
    """

    name: str = ""
    requires_numeric: bool = True

    def __init__(self, column: str) -> None:
        self.column = column

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.column})"

    __repr__ = __str__

    @property
    def output_name(self) -> str:
        """The name of the column that will hold the aggregated values."""
        return f"{self.column}_{self.name}"

    @abc.abstractmethod
    def compute(self, values: list[Any]) -> Any: ...


class NumericAggregation(Aggregation):
    """Provide a base implementation for aggregations over numbers.

    The values are converted to an arrow array of floats
    and the reduction is delegated to a compute function.
    """

    def compute(self, values: list[Any]) -> float:
        return self._aggregate(numeric_array(values))

    @abc.abstractmethod
    def _aggregate(self, data: pa.Array) -> float: ...


class SumAggregation(NumericAggregation):
    """Compute the sum of an aggregated column, zero when there are no values."""

    name = "sum"

    def _aggregate(self, data: pa.Array) -> float:
        return _as_float(pc.sum(data, min_count=0))


class MeanAggregation(NumericAggregation):
    """Compute the mean of an aggregated column.

    A group without numeric values has a ``NaN`` mean.
    """

    name = "mean"

    def _aggregate(self, data: pa.Array) -> float:
        if len(data) == 0:
            return math.nan
        return _as_float(pc.mean(data))


class MinAggregation(NumericAggregation):
    """Compute the min of an aggregated column.

    Like any other aggregation a ``NaN`` value makes the result ``NaN``.
    """

    name = "min"

    def _aggregate(self, data: pa.Array) -> float:
        if _has_nan(data):
            return math.nan
        return _as_float(pc.min(data))


class MaxAggregation(NumericAggregation):
    """Compute the max of an aggregated column."""

    name = "max"

    def _aggregate(self, data: pa.Array) -> float:
        if _has_nan(data):
            return math.nan
        return _as_float(pc.max(data))


class StdDevAggregation(NumericAggregation):
    """Compute the standard deviation of an aggregated column.

    By default this is the sample standard deviation,
    using Bessel's correction (dividing by ``n - 1``).
    With less than two values the deviation is undefined
    and ``NaN`` is returned.
    """

    name = "std_dev"

    def __init__(self, column: str, bessel: bool = True) -> None:
        super().__init__(column)
        self.bessel = bessel

    def _aggregate(self, data: pa.Array) -> float:
        if len(data) <= 1:
            return math.nan
        return _as_float(pc.stddev(data, ddof=1 if self.bessel else 0))


class CountAggregation(Aggregation):
    """Count the non blank values of an aggregated column.

    Any column can be counted, values are not required
    to be numbers, only blanks are left out.
    """

    name = "count"
    requires_numeric = False

    def compute(self, values: list[Any]) -> int:
        return sum(1 for v in values if not is_blank(v))


AGGREGATIONS: dict[str, type[Aggregation]] = {
    agg.name: agg
    for agg in (
        SumAggregation,
        MeanAggregation,
        CountAggregation,
        MinAggregation,
        MaxAggregation,
        StdDevAggregation,
    )
}


def get_aggregation(name: str, column: str) -> Aggregation:
    """Build the aggregation registered as ``name`` for a column."""
    try:
        aggregation_class = AGGREGATIONS[name]
    except (KeyError, TypeError):
        raise PolicyError(
            f"Unsupported aggregation {name!r}, expected one of {list(AGGREGATIONS)}"
        ) from None
    return aggregation_class(column)


def quantile(values: list[Any], q: float) -> float:
    """Compute the ``q``-th percentile of the numeric values.

    Uses linear interpolation between the two values
    surrounding the fractional rank ``(n - 1) * q / 100``.
    Any ``NaN`` value makes the result ``NaN``.

    >>> quantile([1.0, 2.0, 3.0, 4.0], 50)
    2.5
    """
    if not 0 <= q <= 100:
        raise PolicyError(f"Quantile must be between 0 and 100, got {q}")
    data = numeric_array(values)
    if len(data) == 0 or _has_nan(data):
        return math.nan
    result = pc.quantile(data, q=q / 100, interpolation="linear")
    value = result[0].as_py()
    return math.nan if value is None else value


def median(values: list[Any]) -> float:
    """The 50th percentile of the numeric values."""
    return quantile(values, 50)


class GroupAggregation:
    """Group rows by a set of key columns and compute aggregations.

    Groups are collected in a dictionary keyed by the composite key
    of each row. The resulting table has one row per group with the
    key columns first (recovered by splitting the composite key,
    so they are text and get their type detected again by the table)
    followed by one column per aggregation.

    Groups are emitted in the order they were first seen,
    but callers shouldn't rely on it and sort the result
    when they need a specific order.
    """

    def __init__(
        self, keys: list[str], aggregations: list[Aggregation], separator: str
    ) -> None:
        """
        :param keys: The columns to group by.
        :param aggregations: The aggregations to compute for each group.
        :param separator: The separator used to build composite keys.
        """
        self.keys = keys
        self.aggregations = aggregations
        self.separator = separator

    def __str__(self) -> str:
        return f"GroupAggregation(keys={self.keys}, aggregations={self.aggregations})"

    def group(self, columns: list[str], rows: list[list]) -> dict[str, list[list]]:
        """Split the rows into groups sharing the same key values."""
        key_positions = [columns.index(k) for k in self.keys]
        groups: dict[str, list[list]] = {}
        for row in rows:
            group_key = compose_key((row[i] for i in key_positions), self.separator)
            groups.setdefault(group_key, []).append(row)
        return groups

    def compute(self, columns: list[str], rows: list[list]) -> list[list]:
        """Compute the aggregations and return the result as a grid with headers."""
        value_positions = [columns.index(a.column) for a in self.aggregations]
        headers = [*self.keys, *(a.output_name for a in self.aggregations)]

        grid: list[list] = [headers]
        for group_key, group_rows in self.group(columns, rows).items():
            aggregated_row: list = split_key(group_key, self.separator)
            for aggregation, position in zip(self.aggregations, value_positions):
                aggregated_row.append(
                    aggregation.compute([row[position] for row in group_rows])
                )
            grid.append(aggregated_row)
        return grid
