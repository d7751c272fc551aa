from __future__ import annotations

from ..models.processing_result import DistillRunResult

"""SUMMARY line rendering for the distill CLI.

Format:
SUMMARY files={total}/{total} success={success} failed={failed} records={records}
matched={matched} elapsed_sec={elapsed}
"""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: DistillRunResult) -> str:
    """Render a SUMMARY line from a DistillRunResult.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = DistillRunResult(
        ...     success_files=1, failed_files=0, total_records=120, matched_records=14,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 success=1 failed=0 records=120 matched=14 elapsed_sec=2'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"records={result.total_records} "
        f"matched={result.matched_records} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )
