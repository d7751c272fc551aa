from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run result models for the DB Distiller batch host.

This module defines the models aggregating per-workbook outcomes of a CLI run.
They feed the SUMMARY line and the exit code decision.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-workbook statistics (internal helper for DistillRunResult)."""
    file_name: str  # ファイル名
    status: str  # success/failed
    total_records: int  # パース後レコード数
    matched_records: int  # フィルタ通過数
    elapsed_seconds: float
    output_path: str | None = None  # 出力 HTML (失敗時 None)
    warnings: int = 0
    error: str | None = None


@dataclass(frozen=True)
class DistillRunResult:
    """Aggregated results for a distill run."""
    success_files: int
    failed_files: int
    total_records: int
    matched_records: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
