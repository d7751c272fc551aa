from __future__ import annotations

import html
from collections.abc import Callable, Sequence

from ..excel.dates import format_display_date
from ..models.proposal_record import ProposalRecord
from .status_style import get_print_status_style, get_status_color

"""HTML rendering of distilled records.

- render_table_html: display fragment (CSS utility classes for status badges)
- render_print_document: standalone document with inline badge styles that
  prints itself on load
"""

__all__ = [
    "DISPLAY_COLUMNS",
    "EMPTY_MESSAGE",
    "display_row",
    "render_print_document",
    "render_table_html",
]

DISPLAY_COLUMNS: tuple[str, ...] = (
    "ID",
    "Date Received",
    "Principal Investigator",
    "Sponsor/Contractor",
    "Cayuse ID",
    "Status",
    "Status Date",
    "Old DB#",
)

EMPTY_MESSAGE = "No records match the selected filters"
_MISSING = "-"

_PRINT_CSS = """
body { font-family: Arial, sans-serif; margin: 20px; }
h1 { font-size: 18px; margin-bottom: 4px; }
p.meta { font-size: 11px; color: #555; margin-top: 0; }
table { width: 100%; border-collapse: collapse; font-size: 11px; }
th, td { border: 1px solid #ddd; padding: 4px 6px; text-align: left; }
th { background-color: #f5f5f5; font-weight: bold; }
.badge { padding: 2px 8px; border-radius: 9999px; font-size: 10px; font-weight: 500; white-space: nowrap; }
@media print { body { margin: 0; } }
""".strip()


def _esc(value: object) -> str:
    return html.escape(str(value), quote=True)


def display_row(record: ProposalRecord) -> list[str]:
    """Cell texts of one table row, in DISPLAY_COLUMNS order."""
    return [
        record.db_no,
        format_display_date(record.date_received) or _MISSING,
        record.pi_name,
        record.sponsor_name,
        record.identifier_ref or _MISSING,
        record.status,
        format_display_date(record.status_date) or _MISSING,
        record.legacy_id or _MISSING,
    ]


def _heading(shown: int, total_records: int) -> str:
    return f"Filtered Results ({shown} of {total_records} records)"


def _table(records: Sequence[ProposalRecord], badge_attr: Callable[[str], str]) -> str:
    status_idx = DISPLAY_COLUMNS.index("Status")
    head = "".join(f"<th>{_esc(c)}</th>" for c in DISPLAY_COLUMNS)
    body: list[str] = []
    for record in records:
        cells = []
        for i, text in enumerate(display_row(record)):
            if i == status_idx:
                cells.append(f'<td><span {badge_attr(record.status)}>{_esc(text)}</span></td>')
            else:
                cells.append(f"<td>{_esc(text)}</td>")
        body.append(f"<tr>{''.join(cells)}</tr>")
    return f"<table><thead><tr>{head}</tr></thead><tbody>{''.join(body)}</tbody></table>"


def render_table_html(records: Sequence[ProposalRecord], total_records: int) -> str:
    """Render the on-screen result fragment."""
    if not records:
        return f'<div data-table-container><p class="empty">{EMPTY_MESSAGE}</p></div>'

    def badge(status: str) -> str:
        return f'class="badge {_esc(get_status_color(status))}"'

    return (
        "<div data-table-container>"
        f"<h2>{_esc(_heading(len(records), total_records))}</h2>"
        f"{_table(records, badge)}"
        "</div>"
    )


def render_print_document(
    records: Sequence[ProposalRecord],
    total_records: int,
    *,
    title: str = "DB Distiller Results",
    processed_at: str | None = None,
    auto_print: bool = True,
) -> str:
    """Render a standalone print document.

    Status badges carry inline styles computed by ``get_print_status_style`` so
    the document keeps its colours without the screen stylesheet.
    """
    def badge(status: str) -> str:
        return f'class="badge" style="{_esc(get_print_status_style(status).to_css())}"'

    meta = f"<p class=\"meta\">Processed at {_esc(processed_at)}</p>" if processed_at else ""
    content = _table(records, badge) if records else f"<p>{EMPTY_MESSAGE}</p>"
    script = "<script>window.onload = function () { window.print(); };</script>" if auto_print else ""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<title>{_esc(title)}</title>\n"
        f"<style>\n{_PRINT_CSS}\n</style>\n"
        "</head>\n<body>\n"
        f"<h1>{_esc(_heading(len(records), total_records))}</h1>\n"
        f"{meta}\n{content}\n{script}\n"
        "</body>\n</html>\n"
    )
