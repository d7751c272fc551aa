from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from db_distiller.excel.reader import (
    DecodeError,
    EmptyWorkbookError,
    read_first_sheet,
    read_workbook_rows,
    sheet_to_rows,
)


def test_read_first_sheet_only(temp_workdir: Path):
    path = temp_workdir / "multi.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([["DB No."], ["1"]]).to_excel(writer, sheet_name="First", header=False, index=False)
        pd.DataFrame([["Other"], ["2"]]).to_excel(writer, sheet_name="Second", header=False, index=False)

    rows = read_workbook_rows(path)
    assert rows == [["DB No."], ["1"]]


def test_read_from_bytes_and_file_object(make_workbook):
    path = make_workbook("bytes.xlsx", [["DB No.", "PI Name"], [1703, "Jane Doe"]])
    raw = path.read_bytes()

    from_bytes = read_workbook_rows(raw)
    with path.open("rb") as fh:
        from_handle = read_workbook_rows(fh)

    assert from_bytes == from_handle
    assert from_bytes[1] == [1703, "Jane Doe"]


def test_literal_na_strings_are_kept(make_workbook):
    path = make_workbook("na.xlsx", [["Status", "Notes"], ["N/A", "NA"]])
    rows = read_workbook_rows(path)
    assert rows[1] == ["N/A", "NA"]


def test_date_cells_keep_decoder_type(make_workbook):
    path = make_workbook("dates.xlsx", [["Date Received"], [datetime(2024, 3, 15)]])
    rows = read_workbook_rows(path)
    assert isinstance(rows[1][0], datetime)


def test_decode_error_on_garbage_bytes():
    with pytest.raises(DecodeError):
        read_first_sheet(b"this is not a spreadsheet")


def test_decode_error_on_missing_file(temp_workdir: Path):
    with pytest.raises(DecodeError):
        read_first_sheet(temp_workdir / "nope.xlsx")


def test_empty_workbook(temp_workdir: Path):
    path = temp_workdir / "empty.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame().to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    with pytest.raises(EmptyWorkbookError):
        read_first_sheet(path)


def test_sheet_to_rows_converts_nan_to_none():
    df = pd.DataFrame([["a", float("nan")], [pd.NaT, 3]])
    assert sheet_to_rows(df) == [["a", None], [None, 3]]
