"""Settings shared by the tables of a workflow.

A few behaviours of the library depend on settings that the
user might want to tune:

* The separator used to build composite keys when grouping
  or pivoting on more than one column. It must never appear
  inside the grouped data, so users working with data that
  contains the default separator can pick another one.
* How many values are sampled for each column when
  detecting its type.

Instead of relying on process wide globals, settings are kept in
a :class:`FrostConfig` that each :class:`frosts.DataFrame` carries
along and hands down to every table derived from it.

>>> config = FrostConfig(separator="|")
>>> config.separator
'|'
>>> config.replace(sample_size=10).sample_size
10
"""

from typing import Self

from .errors import PolicyError

__all__ = ("FrostConfig", "DEFAULT_CONFIG")


class FrostConfig:
    """Immutable set of settings for DataFrames."""

    __slots__ = ("_separator", "_sample_size")

    def __init__(self, separator: str = "~~~", sample_size: int = 100) -> None:
        """
        :param separator: Token joining the values of composite keys.
        :param sample_size: Maximum number of values inspected per column
                            when detecting column types.
        """
        if not isinstance(separator, str) or not separator:
            raise PolicyError("The key separator must be a non-empty string")
        if (
            isinstance(sample_size, bool)
            or not isinstance(sample_size, int)
            or sample_size <= 0
        ):
            raise PolicyError(
                f"The type detection sample size must be a positive integer, got {sample_size!r}"
            )
        self._separator = separator
        self._sample_size = sample_size

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def sample_size(self) -> int:
        return self._sample_size

    def replace(self, **changes) -> Self:
        """Return a new configuration with the given settings changed."""
        settings = {"separator": self._separator, "sample_size": self._sample_size}
        unknown = set(changes) - set(settings)
        if unknown:
            raise PolicyError(f"Unknown settings: {sorted(unknown)}")
        settings.update(changes)
        return self.__class__(**settings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrostConfig):
            return NotImplemented
        return (self._separator, self._sample_size) == (
            other._separator,
            other._sample_size,
        )

    def __hash__(self) -> int:
        return hash((self._separator, self._sample_size))

    def __repr__(self) -> str:
        return f"FrostConfig(separator={self._separator!r}, sample_size={self._sample_size})"


DEFAULT_CONFIG = FrostConfig()
