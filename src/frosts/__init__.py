"""frosts

A small in-memory DataFrame library for spreadsheet automation.

frosts lets users perform pandas-like data manipulation
(filtering, grouping, joining, reshaping and column transforms)
over rectangular data read from spreadsheet ranges, CSV text or JSON,
and hand the result back as a grid of values ready to be written.

The library is constituted by a few components, each
self documented in literate programming style:

* The :class:`DataFrame`, which provides the high level API.
* The Compute functions (:mod:`frosts.compute`), in charge of
  type detection, grouping, joining and reshaping data.
* The data sources (:mod:`frosts.datasources`), which turn
  CSV, JSON and Arrow data into DataFrames.

>>> import frosts
>>> df = frosts.read_csv("Name,Dept,Salary\\nAlice,Eng,120\\nBob,HR,85\\nCarol,Eng,95")
>>> df.filter("Salary", lambda v: v > 90).get_column("Name")
['Alice', 'Carol']
>>> df.group_by("Dept", {"Salary": "mean"}).to_array()
[['Dept', 'Salary_mean'], ['Eng', 107.5], ['HR', 85.0]]
"""

from . import compute
from .compute.inference import CellValue, to_numeric
from .compute.predicates import equal, is_blank, not_blank, not_equal
from .config import DEFAULT_CONFIG, FrostConfig
from .dataframe import DataFrame, FrostRow, combine_dfs
from .datasources import (
    from_arrow,
    open_csv,
    open_parquet,
    read_csv,
    read_json,
    read_records,
)
from .errors import (
    ColumnTypeError,
    DimensionMismatchError,
    FrostError,
    KeyCollisionError,
    KeyIncompleteError,
    MembershipError,
    PolicyError,
    StructuralError,
)

__all__ = (
    "compute",
    "CellValue",
    "DataFrame",
    "FrostRow",
    "combine_dfs",
    "FrostConfig",
    "DEFAULT_CONFIG",
    "read_csv",
    "read_json",
    "read_records",
    "open_csv",
    "open_parquet",
    "from_arrow",
    "to_numeric",
    "equal",
    "not_equal",
    "is_blank",
    "not_blank",
    "FrostError",
    "StructuralError",
    "MembershipError",
    "ColumnTypeError",
    "DimensionMismatchError",
    "KeyCollisionError",
    "PolicyError",
    "KeyIncompleteError",
)
