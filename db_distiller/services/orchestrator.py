from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import EmptyWorkbookError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord, records_from_warnings
from ..models.config_models import DistillerConfig
from ..models.processing_result import DistillRunResult, FileStat
from .processor import ProcessingFailedError
from .progress import ProgressTracker
from .render import render_print_document
from .session import DistillerSession

logger = logging.getLogger(__name__)

"""Batch orchestration for the distill CLI.

For each workbook: parse -> filter -> write print document. A failing workbook
is recorded and the run continues with the next one.
"""

__all__ = [
    "ProcessingError",
    "distill_all",
    "output_path_for",
    "scan_workbooks",
]


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


WORKBOOK_SUFFIXES = (".xlsx", ".xls")


def scan_workbooks(paths: Sequence[Path]) -> list[Path]:
    """Expand directories (non-recursive) into their .xlsx/.xls files.

    Raises:
        ProcessingError: a path does not exist or a directory cannot be read
    """
    found: list[Path] = []
    for path in paths:
        if not path.exists():
            raise ProcessingError(f"path not found: {path}")
        if path.is_dir():
            try:
                found.extend(
                    sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in WORKBOOK_SUFFIXES)
                )
            except OSError as e:
                raise ProcessingError(f"Error reading directory {path}: {e}") from e
        else:
            # 明示指定されたファイルは拡張子を問わない (デコード失敗で判定)
            found.append(path)
    return found


def output_path_for(workbook: Path, output_dir: Path) -> Path:
    return output_dir / f"{workbook.stem}-distilled.html"


def distill_all(
    workbooks: Sequence[Path],
    config: DistillerConfig,
    *,
    selected_statuses: Sequence[str] | None = None,
    output_dir: Path | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> DistillRunResult:
    """Distill every workbook and aggregate the outcome.

    Args:
        workbooks: Workbook paths, processed in the given order
        config: Owner / default selection / output directory
        selected_statuses: Overrides ``config.selected_statuses`` when given
        output_dir: Overrides ``config.output_directory`` when given
        error_log: Buffer receiving parse failures and warnings

    Raises:
        ProcessingError: output directory cannot be created
    """
    start_time = datetime.now(UTC)
    out_dir = output_dir if output_dir is not None else Path(config.output_directory)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProcessingError(f"cannot create output directory {out_dir}: {e}") from e

    # CLI 実行ではアイドルタイマーは不要 (close() で必ず停止)
    session = DistillerSession(config)
    if selected_statuses is not None:
        session.set_filter(selected_statuses)

    file_stats: list[FileStat] = []
    try:
        with ProgressTracker(len(workbooks)) as progress:
            for path in workbooks:
                progress.start_file(path)
                stat = _distill_one(session, path, out_dir, error_log)
                file_stats.append(stat)
                progress.finish_file(matched=stat.matched_records)
    finally:
        session.close()

    end_time = datetime.now(UTC)
    succeeded = [s for s in file_stats if s.status == "success"]
    return DistillRunResult(
        success_files=len(succeeded),
        failed_files=len(file_stats) - len(succeeded),
        total_records=sum(s.total_records for s in succeeded),
        matched_records=sum(s.matched_records for s in succeeded),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )


def _distill_one(
    session: DistillerSession,
    path: Path,
    out_dir: Path,
    error_log: ErrorLogBuffer | None,
) -> FileStat:
    started = time.perf_counter()
    try:
        data = session.parse(path)
    except ProcessingFailedError as e:
        logger.error(f"{path.name}: {e}")
        if error_log is not None:
            error_type = "EMPTY_WORKBOOK" if isinstance(e.__cause__, EmptyWorkbookError) else "DECODE_ERROR"
            error_log.append(ErrorRecord.create(path.name, -1, error_type, e.cause))
        return FileStat(
            file_name=path.name,
            status="failed",
            total_records=0,
            matched_records=0,
            elapsed_seconds=time.perf_counter() - started,
            error=str(e),
        )

    if error_log is not None and data.warnings:
        error_log.extend(records_from_warnings(path.name, data.warnings))
    for status in sorted({w.value for w in data.warnings if w.kind == "NON_CANONICAL_STATUS"}):
        logger.warning(f"{path.name}: status not selectable by filter: {status!r}")

    matched = session.filtered_records
    out_path = output_path_for(path, out_dir)
    out_path.write_text(
        render_print_document(
            matched,
            data.total_records,
            title=f"{session.config.owner} - {path.name}",
            processed_at=data.processed_at,
        ),
        encoding="utf-8",
    )
    logger.info(f"{path.name}: {len(matched)} of {data.total_records} records -> {out_path}")
    return FileStat(
        file_name=path.name,
        status="success",
        total_records=data.total_records,
        matched_records=len(matched),
        elapsed_seconds=time.perf_counter() - started,
        output_path=str(out_path),
        warnings=len(data.warnings),
    )
