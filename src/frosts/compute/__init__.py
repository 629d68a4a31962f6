"""The frosts Compute functions

The compute package contains the algorithms behind
the :class:`frosts.DataFrame` operations, each module
working on plain lists of rows and column names:

* :mod:`.inference` detects column types and coerces values.
* :mod:`.keys` builds composite keys for multi column grouping.
* :mod:`.aggregate` groups rows and computes statistics.
* :mod:`.join` joins two tables on equal keys.
* :mod:`.reshape` melts, pivots and stacks tables.
* :mod:`.sorting` sorts rows on multiple columns.
* :mod:`.predicates` provides predicates for filtering.
* :mod:`.numeric` reduces lists of numbers, for row wise computations.

Numeric statistics are computed by :mod:`pyarrow.compute`:

>>> from frosts.compute import StdDevAggregation
>>> round(StdDevAggregation("n").compute([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]), 6)
2.13809
"""

from . import numeric
from .aggregate import (
    AGGREGATIONS,
    Aggregation,
    CountAggregation,
    GroupAggregation,
    MaxAggregation,
    MeanAggregation,
    MinAggregation,
    StdDevAggregation,
    SumAggregation,
    median,
    quantile,
)
from .inference import (
    BOOLEAN,
    NUMBER,
    STRING,
    detect_column_type,
    detect_value_type,
    to_numeric,
)
from .join import FirstMatchJoin
from .keys import compose_key, split_key
from .predicates import equal, is_blank, not_blank, not_equal

__all__ = (
    "AGGREGATIONS",
    "Aggregation",
    "CountAggregation",
    "GroupAggregation",
    "MaxAggregation",
    "MeanAggregation",
    "MinAggregation",
    "StdDevAggregation",
    "SumAggregation",
    "median",
    "quantile",
    "BOOLEAN",
    "NUMBER",
    "STRING",
    "detect_column_type",
    "detect_value_type",
    "to_numeric",
    "FirstMatchJoin",
    "compose_key",
    "split_key",
    "equal",
    "is_blank",
    "not_blank",
    "not_equal",
    "numeric",
)
