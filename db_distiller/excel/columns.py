from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

"""Header -> logical field mapping and cell extraction.

Matching rule: the trimmed, lower-cased header text must CONTAIN one of the
field's synonyms. Fields are matched independently; the first matching column
wins. Two fields may resolve to the same column when a header is ambiguous
(e.g. "Status Date" satisfies both ``status`` and ``status_date``).
"""

__all__ = [
    "COLUMN_RULES",
    "ColumnRule",
    "create_column_mapping",
    "get_cell_value",
    "match_rule",
    "stringify_cell",
]


@dataclass(frozen=True)
class ColumnRule:
    field: str
    synonyms: tuple[str, ...]  # 小文字, 優先順


COLUMN_RULES: tuple[ColumnRule, ...] = (
    ColumnRule("db_no", ("db_no", "db no", "database number", "db#", "proposal number", "id")),
    ColumnRule("pi_name", ("pi_name", "pi name", "principal investigator", "pi", "investigator")),
    ColumnRule(
        "sponsor_name",
        ("sponsor_name", "sponsor name", "sponsor", "funding agency", "sponsor/contractor"),
    ),
    ColumnRule("status", ("status", "proposal status", "current status")),
    ColumnRule("owner", ("gco/gca/scco", "gco", "gca", "scco", "gco gca scco", "gco_gca_scco")),
    ColumnRule(
        "date_received",
        ("date_received", "date received", "received date", "submission date"),
    ),
    ColumnRule("to_set_up", ("to_set_up", "to set up", "setup date", "due date")),
    ColumnRule("identifier_ref", ("cayuse", "cayuse number", "cayuse id")),
    ColumnRule("notes", ("notes", "comments", "remarks")),
    ColumnRule("status_date", ("status_date", "status date", "date status", "status changed")),
    ColumnRule("legacy_id", ("old_db", "old db", "old database", "old db#", "previous db")),
)


def _normalize_header(header: Any) -> str:
    if header is None:
        return ""
    return str(header).lower().strip()


def match_rule(rule: ColumnRule, headers: Sequence[Any]) -> int | None:
    """Return the index of the first header satisfying ``rule`` or None."""
    for i, header in enumerate(headers):
        text = _normalize_header(header)
        if text and any(name in text for name in rule.synonyms):
            return i
    return None


def create_column_mapping(
    headers: Sequence[Any], rules: Sequence[ColumnRule] = COLUMN_RULES
) -> dict[str, int | None]:
    return {rule.field: match_rule(rule, headers) for rule in rules}


def stringify_cell(value: Any) -> str:
    """Render a decoded cell as text.

    Integral floats drop the trailing ``.0`` and date cells become ISO dates so
    that the date normalizer can re-render them.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if (value.hour, value.minute, value.second, value.microsecond) == (0, 0, 0, 0):
            return value.strftime("%Y-%m-%d")
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        # 時刻のみのセル: 日付ではないのでそのまま文字列化 (日付正規化で素通り)
        return value.isoformat()
    return str(value)


def get_cell_value(row: Sequence[Any], column_index: int | None) -> str | None:
    if column_index is None or column_index >= len(row):
        return None
    value = row[column_index]
    if value is None or value == "":
        return None
    text = stringify_cell(value).strip()
    return text or None
