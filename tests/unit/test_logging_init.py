from __future__ import annotations

import logging

from db_distiller.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    enable_debug,
    get_logger,
    log_summary,
    setup_logging,
)


def _record(level: int, msg: str) -> logging.LogRecord:
    return logging.LogRecord("x", level, __file__, 1, msg, None, None)


def test_labeled_formatter_labels():
    fmt = LabeledFormatter()
    assert fmt.format(_record(logging.INFO, "hello")) == "INFO hello"
    assert fmt.format(_record(logging.WARNING, "careful")) == "WARN careful"
    assert fmt.format(_record(logging.ERROR, "boom")) == "ERROR boom"
    assert fmt.format(_record(SUMMARY_LEVEL, "files=1/1")) == "SUMMARY files=1/1"


def test_setup_logging_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert first.name == LOGGER_NAME
    assert len(first.handlers) == 1
    assert first.propagate is False
    assert get_logger() is first


def test_module_loggers_propagate_into_app_logger(capsys):
    setup_logging()
    logging.getLogger("db_distiller.services.processor").warning("child message")
    assert "WARN child message" in capsys.readouterr().out


def test_log_summary_and_debug_hidden_by_default(capsys):
    logger = setup_logging()
    logger.debug("hidden")
    log_summary("files=0/0")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "SUMMARY files=0/0" in out


def test_enable_debug_shows_module_debug_lines(capsys):
    setup_logging()
    enable_debug()
    logging.getLogger("db_distiller.services.processor").debug("column mapping detected: {}")
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG column mapping detected: {}" in out
