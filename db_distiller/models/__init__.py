"""Domain models for the DB Distiller.

This package contains the domain model classes used throughout the application:
normalized proposal records, parse results, configuration and run results.
"""

from .config_models import (
    CANONICAL_STATUSES,
    DEFAULT_SELECTED_STATUSES,
    DEFAULT_SESSION_TIMEOUT_SECONDS,
    DistillerConfig,
)
from .error_record import ErrorRecord
from .processed_data import ParseWarning, ProcessedData
from .processing_result import DistillRunResult, FileStat
from .proposal_record import RECORD_FIELDS, ProposalRecord

__all__ = [
    # Configuration models
    "CANONICAL_STATUSES",
    "DEFAULT_SELECTED_STATUSES",
    "DEFAULT_SESSION_TIMEOUT_SECONDS",
    "DistillerConfig",
    # Parse models
    "ParseWarning",
    "ProcessedData",
    "ProposalRecord",
    "RECORD_FIELDS",
    # Run models
    "DistillRunResult",
    "ErrorRecord",
    "FileStat",
]
