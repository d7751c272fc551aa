from __future__ import annotations

import re
import warnings
from datetime import UTC, datetime, timedelta

import pandas as pd

"""Date normalization for heterogeneous workbook encodings.

Workbooks mix spreadsheet serial day counts (e.g. 45000) with typed date
strings. Both are rendered as zero-padded ``MM/DD/YYYY``; anything else is
passed through unchanged.
"""

__all__ = [
    "DISPLAY_DATE_RE",
    "SERIAL_MAX",
    "SERIAL_MIN",
    "format_date",
    "format_display_date",
    "is_display_date",
    "serial_to_datetime",
]

# Serial range accepted (exclusive): roughly 1968-06 .. 2036-11
SERIAL_MIN = 25000
SERIAL_MAX = 50000
# 1970-01-01 の serial 値 (epoch 1899-12-30)
_UNIX_EPOCH_SERIAL = 25569
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

DISPLAY_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")


def _render(value: datetime) -> str:
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def serial_to_datetime(serial: float) -> datetime:
    """Convert a spreadsheet serial day count to a UTC datetime."""
    millis = (serial - _UNIX_EPOCH_SERIAL) * 86400 * 1000
    return _UNIX_EPOCH + timedelta(milliseconds=millis)


# 先頭の数値部分のみ読む ("45000 (est)" -> 45000)
_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
# 年 (4 桁) を含まない文字列は日付として扱わない ("3/15", "12:00:00", "March")
_YEAR_RE = re.compile(r"\d{4}")
_RELATIVE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})
_MIN_YEAR = 1900


def _parse_number(value: str) -> float | None:
    match = _LEADING_NUMBER_RE.match(value)
    if match is None:
        return None
    return float(match.group(0))


def _parse_generic(value: str) -> datetime | None:
    text = value.strip()
    if text.lower() in _RELATIVE_WORDS or _YEAR_RE.search(text) is None:
        return None
    with warnings.catch_warnings():
        # pandas は推論フォーマットについて UserWarning を出す
        warnings.simplefilter("ignore")
        parsed = pd.to_datetime(text, errors="coerce")
    if parsed is None or pd.isna(parsed):
        return None
    result = parsed.to_pydatetime()
    if result.year < _MIN_YEAR:
        return None
    return result


def format_date(value: str | None) -> str | None:
    if value is None or value == "":
        return None

    number = _parse_number(value)
    if number is not None and SERIAL_MIN < number < SERIAL_MAX:
        return _render(serial_to_datetime(number))

    parsed = _parse_generic(value)
    if parsed is not None:
        return _render(parsed)

    return value


def is_display_date(value: str | None) -> bool:
    return bool(value) and DISPLAY_DATE_RE.match(value) is not None


def format_display_date(value: str | None) -> str | None:
    """Format a stored date for table display.

    Values already in ``M/D/YYYY`` shape are returned as-is; other parseable
    dates are re-rendered; anything else is returned unchanged.
    """
    if not value:
        return None
    if is_display_date(value):
        return value
    parsed = _parse_generic(value)
    if parsed is not None:
        return _render(parsed)
    return value
