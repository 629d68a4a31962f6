"""Detect the type of columns and coerce their values.

Data coming from spreadsheets, CSV text or JSON usually
arrives as a grid of text, where numbers and booleans
are indistinguishable from any other string.

To make the data useful, each column is classified as one of three
types: ``number``, ``boolean`` or ``string``, and the values of
``number`` and ``boolean`` columns are converted to floats and bools.

Classification doesn't scan the whole column. A bounded sample
is taken (the first and the last half of the sample size)
and each sampled value is classified::

    "12", "-3.5", ""   -> number
    "TRUE", "false"    -> boolean
    anything else      -> string

When all sampled values agree the column gets that type,
any disagreement makes the column a ``string`` column.
Values outside of the sample are never looked at, so a large
column whose middle contains text can still be detected
as numeric: its text values will then be parsed to ``NaN``.
That's the price paid for not having to scan every value
each time a table is created.

>>> detect_column_type(["1", "2.5", ""])
'number'
>>> detect_column_type(["true", "FALSE"])
'boolean'
>>> detect_column_type(["1", "apple"])
'string'
"""

import logging
import math
import re
from typing import Any, Iterable

__all__ = (
    "CellValue",
    "NUMBER",
    "BOOLEAN",
    "STRING",
    "DTYPES",
    "is_blank",
    "to_raw_string",
    "detect_value_type",
    "sample_values",
    "detect_column_type",
    "parse_number",
    "parse_boolean",
    "coerce_value",
    "to_numeric",
    "dedupe_headers",
)

logger = logging.getLogger(__name__)

CellValue = str | float | bool | None

NUMBER = "number"
BOOLEAN = "boolean"
STRING = "string"
DTYPES = (STRING, NUMBER, BOOLEAN)

NUMERIC_PATTERN = re.compile(r"-?\d+(\.\d+)?")
# Leading decimal prefix of a text, like "12.5kg" -> "12.5"
NUMERIC_PREFIX = re.compile(r"\s*([-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?)")


def is_blank(value: Any) -> bool:
    """A cell is blank when it has no value or it's an empty string."""
    return value is None or value == ""


def to_raw_string(value: Any) -> str:
    """Render a cell value as the text a spreadsheet would show.

    Integral floats lose their decimal part and
    booleans are lowercase, which makes the rendering
    of a parsed value match the text it was parsed from.

    >>> to_raw_string(3.0), to_raw_string(2.5), to_raw_string(True), to_raw_string(None)
    ('3', '2.5', 'true', '')
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def detect_value_type(value: Any) -> str:
    """Classify a single raw value.

    Native numbers and booleans keep their type,
    while text is classified by its content.
    Empty cells count as numbers.
    """
    if value is None:
        return NUMBER
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER

    text = to_raw_string(value)
    if text == "" or NUMERIC_PATTERN.fullmatch(text):
        return NUMBER
    if text.lower() in ("true", "false"):
        return BOOLEAN
    return STRING


def sample_values(values: list, sample_size: int) -> list:
    """Pick the values inspected to detect the type of a column.

    Columns that fit the sample are inspected entirely,
    otherwise the first and last half of the sample size are picked.

    >>> sample_values(list(range(10)), 4)
    [0, 1, 8, 9]
    """
    if len(values) <= sample_size:
        return list(values)
    half = sample_size // 2
    return list(values[:half]) + list(values[len(values) - half :])


def detect_column_type(values: list, sample_size: int = 100) -> str:
    """Detect the type of a column from a sample of its values.

    Columns with no values are considered ``string`` columns.
    """
    detected = {detect_value_type(v) for v in sample_values(values, sample_size)}
    if len(detected) == 1:
        return detected.pop()
    if detected:
        logger.debug("Mixed types %s detected, falling back to string", sorted(detected))
    return STRING


def parse_number(value: Any) -> float | None:
    """Parse a raw value into a float.

    Blank cells become ``None``, while text that doesn't
    start with a decimal number becomes ``NaN``.
    Like spreadsheets do, trailing garbage after a number is ignored.

    >>> parse_number("12.5"), parse_number("7 units"), parse_number("")
    (12.5, 7.0, None)
    >>> parse_number("apple")
    nan
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)

    text = to_raw_string(value)
    match = NUMERIC_PREFIX.match(text)
    if match is None:
        stripped = text.strip()
        if stripped in ("Infinity", "+Infinity"):
            return math.inf
        if stripped == "-Infinity":
            return -math.inf
        return math.nan
    return float(match.group(1))


def parse_boolean(value: Any) -> bool | None:
    """Parse a raw value into a bool, only ``"true"`` (any case) is true."""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return value
    return to_raw_string(value).lower() == "true"


def coerce_value(value: Any, dtype: str) -> CellValue:
    """Convert a raw value to the type of its column.

    Values of ``string`` columns are kept as they are.
    """
    if dtype == NUMBER:
        return parse_number(value)
    if dtype == BOOLEAN:
        return parse_boolean(value)
    return value


def to_numeric(values: Iterable[Any]) -> list[float]:
    """Parse a sequence of values into floats.

    Unlike column coercion, blank values become ``NaN``
    so that the result can always be used in arithmetic.

    >>> to_numeric(["1", 2, "x"])
    [1.0, 2.0, nan]
    """
    result = []
    for value in values:
        number = parse_number(value)
        result.append(math.nan if number is None else number)
    return result


def dedupe_headers(headers: Iterable[Any]) -> list[str]:
    """Trim headers and make them unique.

    Repeated headers get a numeric suffix in order of appearance,
    skipping any suffix that would clash with an existing header.

    >>> dedupe_headers(["Amount", " Amount ", "Name", "Amount"])
    ['Amount', 'Amount_1', 'Name', 'Amount_2']
    """
    result: list[str] = []
    seen: set[str] = set()
    next_suffix: dict[str, int] = {}
    for header in headers:
        name = to_raw_string(header).strip()
        if name in seen:
            suffix = next_suffix.get(name, 1)
            candidate = f"{name}_{suffix}"
            while candidate in seen:
                suffix += 1
                candidate = f"{name}_{suffix}"
            next_suffix[name] = suffix + 1
            name = candidate
        seen.add(name)
        result.append(name)
    return result
