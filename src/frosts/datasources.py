"""Create DataFrames from external data.

DataFrames are built from grids of values, the functions
in this module take care of turning the most common
sources of data into such grids:

* CSV text, as received by automation flows (:func:`read_csv`).
* JSON arrays of arrays (:func:`read_json`) or lists of records (:func:`read_records`).
* CSV and Parquet files, read through Apache Arrow (:func:`open_csv`, :func:`open_parquet`).
* Arrow tables and record batches (:func:`from_arrow`).

>>> df = read_csv('Name,Amount\\nAlice,"1,024"\\nBob,12\\n')
>>> df.to_array()
[['Name', 'Amount'], ['Alice', 1024.0], ['Bob', 12.0]]
"""

import json
import logging
from typing import Any, Iterable

import pyarrow as pa
import pyarrow.csv
import pyarrow.parquet

from .config import FrostConfig
from .dataframe import DataFrame
from .errors import PolicyError, StructuralError

__all__ = (
    "read_csv",
    "read_json",
    "read_records",
    "open_csv",
    "open_parquet",
    "from_arrow",
    "strip_quoted_delimiters",
)

logger = logging.getLogger(__name__)

CSV_ERROR_POLICIES = ("raise", "coerce")


def strip_quoted_delimiters(text: str) -> str:
    """Remove quotes and the delimiters they protect.

    Numbers are frequently exported with thousands separators
    like ``"1,024"``, splitting on commas would break them in two.
    Inside quotes commas are removed and newlines replaced by spaces,
    the quotes themselves are dropped.

    >>> strip_quoted_delimiters('a,"1,024","two\\nlines"')
    'a,1024,two lines'
    """
    chars = []
    quoted = False
    for char in text:
        if char == '"':
            quoted = not quoted
        elif quoted and char == ",":
            continue
        elif quoted and char == "\n":
            chars.append(" ")
        else:
            chars.append(char)
    return "".join(chars)


def read_csv(
    text: str,
    errors: str = "raise",
    start_index: int = 0,
    line_separator: str = "\n",
    config: FrostConfig | None = None,
) -> DataFrame:
    """Parse CSV text into a DataFrame.

    :param text: The CSV content, the first line holds the headers.
    :param errors: What to do with rows that have a different number of values,
                   ``raise`` a :class:`frosts.errors.StructuralError` or ``coerce``
                   them padding the missing values with ``None``.
    :param start_index: Skip the lines before this one, useful for
                        reports that have a title before the headers.
    :param line_separator: The text separating rows.
    :param config: The settings of the created DataFrame.
    """
    if errors not in CSV_ERROR_POLICIES:
        raise PolicyError(
            f"errors must be one of {', '.join(CSV_ERROR_POLICIES)}, got {errors!r}"
        )

    cleaned = strip_quoted_delimiters(text)
    if line_separator not in cleaned:
        logger.warning("No line separator %r found in CSV text", line_separator)
    lines = cleaned.split(line_separator)
    if lines and lines[-1].strip() == "":
        lines.pop()

    rows: list[list[Any]] = [line.split(",") for line in lines[start_index:]]
    width = max((len(row) for row in rows), default=0)
    for row in rows:
        if len(row) == width:
            continue
        if errors == "raise":
            raise StructuralError(
                "Error in CSV parsing, rows are not all the same size. "
                "If this is intentional, use errors='coerce'"
            )
        row.extend([None] * (width - len(row)))

    return DataFrame(rows, config=config)


def read_json(text: str, config: FrostConfig | None = None) -> DataFrame:
    """Parse a JSON array of arrays into a DataFrame.

    The first array holds the headers, like the output of
    :meth:`frosts.DataFrame.to_json`.
    """
    data = json.loads(text)
    if not isinstance(data, list) or not all(isinstance(row, list) for row in data):
        raise StructuralError("JSON input must be an array of arrays")
    return DataFrame(data, config=config)


def read_records(
    records: Iterable[dict[str, Any]], config: FrostConfig | None = None
) -> DataFrame:
    """Create a DataFrame from a list of ``{column: value}`` records.

    Columns are collected in order of appearance, records
    missing a column get ``None`` for it.

    >>> read_records([{"a": 1}, {"a": 2, "b": "x"}]).to_array()
    [['a', 'b'], [1.0, None], [2.0, 'x']]
    """
    records = list(records)
    columns: dict[str, None] = {}
    for record in records:
        columns.update(dict.fromkeys(record))
    if not columns:
        raise StructuralError("Unable to create a DataFrame from records without columns")
    return DataFrame(
        [list(columns), *([record.get(c) for c in columns] for record in records)],
        config=config,
    )


def open_csv(filename: str, config: FrostConfig | None = None) -> DataFrame:
    """Read a CSV file into a DataFrame.

    The file is parsed by :mod:`pyarrow.csv`, which takes care of
    quoting and escaping. Columns are read as text, the schema is
    polled first to know their names, so that type detection
    happens the same way it does for any other source.

    :param filename: The path to a local CSV file.
    """
    with pa.csv.open_csv(filename) as reader:
        schema = reader.schema
    convert_options = pa.csv.ConvertOptions(
        column_types={name: pa.string() for name in schema.names},
        strings_can_be_null=False,
    )
    table = pa.csv.read_csv(filename, convert_options=convert_options)
    return DataFrame.from_arrow(table, config=config)


def open_parquet(filename: str, config: FrostConfig | None = None) -> DataFrame:
    """Read a Parquet file into a DataFrame.

    Values are read with their stored types and then go through
    the usual type detection, integers and decimals become numbers.

    :param filename: The path to a local Parquet file.
    """
    with pa.parquet.ParquetFile(filename) as reader:
        table = reader.read()
    return DataFrame.from_arrow(table, config=config)


def from_arrow(
    table: pa.Table | pa.RecordBatch, config: FrostConfig | None = None
) -> DataFrame:
    """Create a DataFrame from a :class:`pyarrow.Table` or :class:`pyarrow.RecordBatch`."""
    return DataFrame.from_arrow(table, config=config)
