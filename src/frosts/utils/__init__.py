"""Helpers not bound to a specific component.

Currently this only holds :mod:`.tabulate`, used to render
DataFrames as text when they are printed.
"""

from . import tabulate

__all__ = ("tabulate",)
