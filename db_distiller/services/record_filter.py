from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.config_models import CANONICAL_STATUSES
from ..models.proposal_record import ProposalRecord

"""Record filter for distilled proposal lists.

Stages (順序固定):
1. owner: ``record.owner == owner`` (exact, case-sensitive)
2. status: selected statuses non-empty -> ``record.status in selected`` (exact)
3. PI last name (optional): case-insensitive substring of ``pi_name``

Status comparison is deliberately strict: a workbook value such as
"osraa review" or "OSRAA Review " never matches the label "OSRAA Review".
Use ``non_canonical_statuses`` to surface such values.
"""

__all__ = [
    "filter_records",
    "get_unique_statuses",
    "non_canonical_statuses",
]


def filter_records(
    records: Sequence[ProposalRecord],
    selected_statuses: Iterable[str],
    *,
    owner: str,
    pi_last_name: str | None = None,
) -> list[ProposalRecord]:
    """Return the order-preserving subset of ``records`` to display.

    Args:
        records: Records of the most recent parse
        selected_statuses: Zero or more canonical status labels. Empty means
            no status filtering.
        owner: Configured organizational owner (GCO/GCA/SCCO value)
        pi_last_name: Optional PI last name filter

    Returns:
        New list; ``records`` is not modified.
    """
    selected = frozenset(selected_statuses)

    filtered = [r for r in records if r.owner == owner]

    if selected:
        filtered = [r for r in filtered if r.status in selected]

    if pi_last_name:
        needle = pi_last_name.lower()
        filtered = [r for r in filtered if needle in r.pi_name.lower()]

    return filtered


def get_unique_statuses(records: Iterable[ProposalRecord]) -> list[str]:
    return sorted({r.status for r in records if r.status})


def non_canonical_statuses(
    records: Iterable[ProposalRecord], universe: Sequence[str] = CANONICAL_STATUSES
) -> list[str]:
    """Distinct statuses present in ``records`` that no filter label can select."""
    allowed = set(universe)
    return [s for s in get_unique_statuses(records) if s not in allowed]
