from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the DB Distiller.

These are the typed results of YAML loading (db_distiller/config/loader.py) and
are what the session, filter and CLI consume.
"""

__all__ = [
    "CANONICAL_STATUSES",
    "DEFAULT_SELECTED_STATUSES",
    "DEFAULT_SESSION_TIMEOUT_SECONDS",
    "DistillerConfig",
]

# Fixed filter vocabulary. Free-text statuses in the workbook are compared against it verbatim.
CANONICAL_STATUSES: tuple[str, ...] = (
    "OSRAA Review",
    "Out for Review",
    "Completed",
    "Internal Docs/Info Requested",
    "Out for Signature",
    "External Docs/Info Requested",
    "Set-Up in Process",
)

DEFAULT_SELECTED_STATUSES: tuple[str, ...] = (
    "OSRAA Review",
    "Internal Docs/Info Requested",
    "External Docs/Info Requested",
    "Out for Review",
    "Out for Signature",
)

DEFAULT_SESSION_TIMEOUT_SECONDS = 5 * 60


@dataclass(frozen=True)
class DistillerConfig:
    """Root configuration object for a distiller session / CLI run.

    ``owner`` is the organizational owner that every displayed record must carry
    in its GCO/GCA/SCCO column (exact match).
    """
    owner: str
    session_timeout_seconds: float = DEFAULT_SESSION_TIMEOUT_SECONDS
    selected_statuses: tuple[str, ...] = DEFAULT_SELECTED_STATUSES
    output_directory: str = "./out"
    pi_last_name: str | None = None  # 任意: PI 姓の部分一致フィルタ
