from __future__ import annotations

import logging
import sys

"""Console logging for db_distiller.

Every line is ``LABEL message`` (DEBUG|INFO|WARN|ERROR|SUMMARY) on stdout, so the
CLI output can be grepped for the SUMMARY line. Library modules log through
``logging.getLogger(__name__)`` and propagate into the ``db_distiller`` logger.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "enable_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
    "setup_logging",
]

LOGGER_NAME = "db_distiller"
SUMMARY_LEVEL = 25  # INFO < SUMMARY < WARNING

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        SUMMARY_LEVEL: "SUMMARY",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Attach a single stdout handler to the ``db_distiller`` logger (idempotent)."""
    global _logger
    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # stdout はテストで capsys に差し替わるので setup 時点の sys.stdout を使う
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return logger


def enable_debug() -> None:
    """Lower the logger to DEBUG (column mapping / date diagnostics)."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def get_logger() -> logging.Logger:
    return _logger if _logger is not None else setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    global _logger
    _logger = None
