from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Status -> display category mapping.

One ordered rule set drives both render targets: CSS utility classes for the
on-screen table and inline styles for the print document.
"""

__all__ = [
    "PrintStyle",
    "STATUS_CATEGORY_RULES",
    "StatusCategory",
    "get_print_status_style",
    "get_status_category",
    "get_status_color",
]


class StatusCategory(Enum):
    COMPLETED = "completed"
    OWNER_REVIEW = "owner_review"
    REVIEW = "review"
    REQUESTED = "requested"
    SIGNATURE = "signature"
    IN_PROCESS = "in_process"
    OTHER = "other"


# 順序が意味を持つ: "OSRAA Review" は REVIEW より先に OWNER_REVIEW に当たる
STATUS_CATEGORY_RULES: tuple[tuple[str, StatusCategory], ...] = (
    ("completed", StatusCategory.COMPLETED),
    ("osraa", StatusCategory.OWNER_REVIEW),
    ("review", StatusCategory.REVIEW),
    ("requested", StatusCategory.REQUESTED),
    ("signature", StatusCategory.SIGNATURE),
    ("process", StatusCategory.IN_PROCESS),
)


@dataclass(frozen=True)
class PrintStyle:
    background: str
    color: str

    def to_css(self) -> str:
        return f"background-color: {self.background}; color: {self.color};"


_SCREEN_CLASSES: dict[StatusCategory, str] = {
    StatusCategory.COMPLETED: "bg-green-100 text-green-800",
    StatusCategory.OWNER_REVIEW: "bg-red-100 text-red-800",
    StatusCategory.REVIEW: "bg-yellow-100 text-yellow-800",
    StatusCategory.REQUESTED: "bg-blue-100 text-blue-800",
    StatusCategory.SIGNATURE: "bg-purple-100 text-purple-800",
    StatusCategory.IN_PROCESS: "bg-orange-100 text-orange-800",
    StatusCategory.OTHER: "bg-gray-100 text-gray-800",
}

# Same palette as the screen classes, as hex for inline print styles
_PRINT_STYLES: dict[StatusCategory, PrintStyle] = {
    StatusCategory.COMPLETED: PrintStyle("#dcfce7", "#166534"),
    StatusCategory.OWNER_REVIEW: PrintStyle("#fee2e2", "#991b1b"),
    StatusCategory.REVIEW: PrintStyle("#fef9c3", "#854d0e"),
    StatusCategory.REQUESTED: PrintStyle("#dbeafe", "#1e40af"),
    StatusCategory.SIGNATURE: PrintStyle("#f3e8ff", "#6b21a8"),
    StatusCategory.IN_PROCESS: PrintStyle("#ffedd5", "#9a3412"),
    StatusCategory.OTHER: PrintStyle("#f3f4f6", "#1f2937"),
}


def get_status_category(status: str | None) -> StatusCategory:
    status_lower = (status or "").lower()
    for keyword, category in STATUS_CATEGORY_RULES:
        if keyword in status_lower:
            return category
    return StatusCategory.OTHER


def get_status_color(status: str | None) -> str:
    """CSS classes for the on-screen status badge."""
    return _SCREEN_CLASSES[get_status_category(status)]


def get_print_status_style(status: str | None) -> PrintStyle:
    """Inline style for the status badge in the print document."""
    return _PRINT_STYLES[get_status_category(status)]
