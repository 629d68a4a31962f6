"""Dataframe library for spreadsheet data.

A dataframe library is a tool designed to handle and manipulate structured data,
typically in the form of tables (i.e., rows and columns).
It allows users to load data from various sources (like spreadsheet ranges, CSV text or JSON),
explore it, apply transformations, and analyze it.

Dataframes provide an efficient way to perform operations such as filtering,
aggregation, and merging of datasets.

The frosts dataframe is eager and row oriented: rows are kept in memory
as lists of values sharing the columns of the table, and each
operation immediately produces a new :class:`DataFrame`.
The heavy lifting is done by the functions in :mod:`frosts.compute`.
"""

from .dataframe import DataFrame, combine_dfs
from .row import FrostRow

__all__ = ("DataFrame", "FrostRow", "combine_dfs")
