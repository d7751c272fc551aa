# Shared pytest fixtures
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from db_distiller.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # DISTILLER_OWNER がホスト環境に残っていると owner が上書きされる
    monkeypatch.delenv("DISTILLER_OWNER", raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """owner: Haugaard
session_timeout_seconds: 300
selected_statuses:
  - OSRAA Review
  - Internal Docs/Info Requested
  - External Docs/Info Requested
  - Out for Review
  - Out for Signature
output_directory: ./out
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "distiller.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def write_workbook(path: Path, rows: list[list[object]], sheet_name: str = "Sheet1") -> Path:
    """Write ``rows`` verbatim (row 0 = header) to the first sheet of ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[object]], sheet_name: str = "Sheet1") -> Path:
        return write_workbook(temp_workdir / "data" / name, rows, sheet_name)
    return _make


SAMPLE_HEADERS = ["DB No.", "PI Name", "Sponsor", "Status", "GCO/GCA/SCCO", "Date Received"]


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    return [
        SAMPLE_HEADERS,
        ["1703", "Jane Doe", "Acme Corp", "OSRAA Review", "Haugaard", 45000],
        ["1704", "John Smith", "NIH", "Completed", "Haugaard", "2024-03-15"],
        ["1705", "Ana Garcia", "NSF", "Out for Review", "Smith", "N/A"],
    ]
