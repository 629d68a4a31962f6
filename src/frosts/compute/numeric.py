"""Reductions over lists of numbers.

These are meant as callbacks for :meth:`frosts.DataFrame.map_cols_numeric`,
which invokes them with the values of some numeric columns for each row::

    >>> from frosts import DataFrame
    >>> from frosts.compute import numeric
    >>> df = DataFrame([["low", "high"], [1, 5], [2, 3]])
    >>> df.map_cols_numeric(numeric.range, "low", "high")
    [4.0, 1.0]
    >>> df.map_cols_numeric(numeric.product, "low", "high")
    [5.0, 6.0]

Blank cells are provided as ``NaN`` and, apart from :func:`count`
which skips them, any ``NaN`` makes the result ``NaN``.
Reducing an empty list gives ``0`` for sums and counts,
``1`` for products and ``NaN`` for everything else.

The functions share their names with Python builtins,
so the module is meant to be used qualified, as ``numeric.sum``.
"""

import builtins
import math
from typing import Iterable

__all__ = ("sum", "count", "mean", "min", "max", "range", "product")


def _has_nan(nums: list[float]) -> bool:
    return any(math.isnan(x) for x in nums)


def sum(nums: Iterable[float]) -> float:
    """Total of the numbers."""
    return builtins.sum(nums, 0.0)


def count(nums: Iterable[float]) -> int:
    """How many numbers are not ``NaN``."""
    return builtins.sum(1 for x in nums if not math.isnan(x))


def mean(nums: Iterable[float]) -> float:
    nums = list(nums)
    if not nums:
        return math.nan
    return sum(nums) / len(nums)


def min(nums: Iterable[float]) -> float:
    nums = list(nums)
    if not nums or _has_nan(nums):
        return math.nan
    return builtins.min(nums)


def max(nums: Iterable[float]) -> float:
    nums = list(nums)
    if not nums or _has_nan(nums):
        return math.nan
    return builtins.max(nums)


def range(nums: Iterable[float]) -> float:
    """Difference between the largest and the smallest number."""
    nums = list(nums)
    return max(nums) - min(nums)


def product(nums: Iterable[float]) -> float:
    return math.prod(nums, start=1.0)
