from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .proposal_record import ProposalRecord

"""ProcessedData model for the DB Distiller.

Result of a single workbook parse. Held in memory only for the lifetime of a
distiller session; it is never persisted.
"""

__all__ = [
    "ParseWarning",
    "ProcessedData",
]


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal issue found while parsing (the row is still kept).

    kind は UPPER_SNAKE (UNPARSEABLE_DATE / NON_CANONICAL_STATUS)。
    """
    row: int  # 1-based sheet row
    field: str
    value: str
    kind: str


@dataclass(frozen=True)
class ProcessedData:
    """Records from one parse plus metadata.

    Attributes:
        records: Normalized records in source row order
        total_records: len(records)
        processed_at: ISO8601 timestamp of parse completion
        headers: Raw header row (index 0 of the sheet) for diagnostics
        warnings: Non-fatal parse warnings
    """
    records: list[ProposalRecord]
    total_records: int
    processed_at: str
    headers: list[Any]
    warnings: list[ParseWarning] = field(default_factory=list)

    def to_json(self) -> str:
        payload = {
            "records": [r.to_dict() for r in self.records],
            "totalRecords": self.total_records,
            "processedAt": self.processed_at,
            "headers": [None if h is None else str(h) for h in self.headers],
        }
        return json.dumps(payload, ensure_ascii=False)
