from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

from ..excel.columns import create_column_mapping, get_cell_value
from ..excel.dates import format_date, is_display_date
from ..excel.reader import DecodeError, EmptyWorkbookError, WorkbookSource, read_workbook_rows
from ..models.config_models import CANONICAL_STATUSES
from ..models.processed_data import ParseWarning, ProcessedData
from ..models.proposal_record import ProposalRecord

logger = logging.getLogger(__name__)

"""Workbook parser: binary spreadsheet -> ProcessedData.

Single pass over the first sheet:
1. decode (excel.reader)
2. header row -> column mapping (excel.columns)
3. skip blank rows, extract + trim cells, normalize dates
4. drop records with no db_no / pi_name / sponsor_name
"""

__all__ = [
    "DATE_FIELDS",
    "ProcessingFailedError",
    "process_rows",
    "process_workbook",
]

DATE_FIELDS: tuple[str, ...] = ("date_received", "to_set_up", "status_date")

# 先頭数件のみ日付の raw/formatted を DEBUG 出力
_DEBUG_SAMPLE_ROWS = 3


class ProcessingFailedError(Exception):
    """Single user-facing failure for a parse (decode failure or empty workbook)."""

    def __init__(self, cause: str) -> None:
        super().__init__(f"Failed to process Excel file: {cause}")
        self.cause = cause


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _is_blank_row(row: Any) -> bool:
    if not isinstance(row, (list, tuple)):
        return True
    return all(cell is None or cell == "" for cell in row)


def _build_record(
    row: Sequence[Any],
    mapping: dict[str, int | None],
    row_number: int,
    warnings: list[ParseWarning],
) -> ProposalRecord:
    def cell(name: str) -> str | None:
        return get_cell_value(row, mapping.get(name))

    dates: dict[str, str | None] = {}
    for name in DATE_FIELDS:
        raw = cell(name)
        formatted = format_date(raw)
        if raw is not None and formatted == raw and not is_display_date(raw):
            warnings.append(ParseWarning(row=row_number, field=name, value=raw, kind="UNPARSEABLE_DATE"))
        dates[name] = formatted
        if row_number - 1 <= _DEBUG_SAMPLE_ROWS:
            logger.debug(f"row {row_number} {name}: raw={raw!r} formatted={formatted!r}")

    status = cell("status") or ""
    if status and status not in CANONICAL_STATUSES:
        warnings.append(ParseWarning(row=row_number, field="status", value=status, kind="NON_CANONICAL_STATUS"))

    return ProposalRecord(
        db_no=cell("db_no") or "",
        pi_name=cell("pi_name") or "",
        sponsor_name=cell("sponsor_name") or "",
        status=status,
        owner=cell("owner"),
        date_received=dates["date_received"],
        to_set_up=dates["to_set_up"],
        identifier_ref=cell("identifier_ref"),
        notes=cell("notes"),
        status_date=dates["status_date"],
        legacy_id=cell("legacy_id"),
        row_number=row_number,
    )


def process_rows(
    rows: Sequence[Any], *, clock: Callable[[], datetime] = _utc_now
) -> ProcessedData:
    """Normalize an already decoded grid (row 0 = headers).

    Raises:
        EmptyWorkbookError: grid has no rows
    """
    if len(rows) == 0:
        raise EmptyWorkbookError("No data found in Excel file")

    header_row = rows[0]
    headers = list(header_row) if isinstance(header_row, (list, tuple)) else []
    mapping = create_column_mapping(headers)
    logger.debug(f"headers found: {headers}")
    logger.debug(f"column mapping detected: {mapping}")

    warnings: list[ParseWarning] = []
    records: list[ProposalRecord] = []
    # シート行番号: ヘッダ = 1, データ先頭 = 2
    for offset, row in enumerate(rows[1:], start=2):
        if _is_blank_row(row):
            continue
        record = _build_record(row, mapping, offset, warnings)
        if record.is_blank:
            continue
        records.append(record)

    processed_at = clock().isoformat().replace("+00:00", "Z")
    return ProcessedData(
        records=records,
        total_records=len(records),
        processed_at=processed_at,
        headers=headers,
        warnings=warnings,
    )


def process_workbook(
    source: WorkbookSource, *, clock: Callable[[], datetime] = _utc_now
) -> ProcessedData:
    """Parse the first sheet of a workbook into ProcessedData.

    Args:
        source: Path, raw bytes or binary file object of an .xlsx/.xls workbook
        clock: Source of the processing timestamp

    Raises:
        ProcessingFailedError: the bytes could not be decoded or the sheet is empty
    """
    try:
        rows = read_workbook_rows(source)
        data = process_rows(rows, clock=clock)
    except (DecodeError, EmptyWorkbookError) as e:
        logger.debug(f"parse failed: {type(e).__name__}: {e}")
        raise ProcessingFailedError(str(e)) from e

    logger.info(
        f"parsed {data.total_records} records ({len(data.warnings)} warnings) from {len(rows) - 1} data rows"
    )
    return data
