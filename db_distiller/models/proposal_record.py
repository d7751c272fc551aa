from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

"""ProposalRecord model for the DB Distiller.

ProposalRecord represents one logical proposal entry extracted from a data row
of the uploaded workbook, after column mapping and date normalization.
"""

__all__ = [
    "ProposalRecord",
    "RECORD_FIELDS",
]

# Logical field order (column rule table と同じ順序)
RECORD_FIELDS: tuple[str, ...] = (
    "db_no",
    "pi_name",
    "sponsor_name",
    "status",
    "owner",
    "date_received",
    "to_set_up",
    "identifier_ref",
    "notes",
    "status_date",
    "legacy_id",
)


@dataclass(frozen=True)
class ProposalRecord:
    """Normalized proposal row.

    The four core text fields default to an empty string when the column is
    absent or the cell is blank; the remaining fields stay ``None``.
    Date fields hold ``MM/DD/YYYY`` or the raw source text when it could not
    be interpreted as a date.
    """
    db_no: str = ""
    pi_name: str = ""
    sponsor_name: str = ""
    status: str = ""
    owner: str | None = None  # source header "GCO/GCA/SCCO"
    date_received: str | None = None
    to_set_up: str | None = None
    identifier_ref: str | None = None  # source header "Cayuse"
    notes: str | None = None
    status_date: str | None = None
    legacy_id: str | None = None  # source header "Old DB#"
    row_number: int | None = None  # 1-based sheet row (header = 1), diagnostics only

    @property
    def is_blank(self) -> bool:
        """True when none of the identifying fields carries text."""
        return not (self.db_no.strip() or self.pi_name.strip() or self.sponsor_name.strip())

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("row_number")
        return data
