from __future__ import annotations

import io
from pathlib import Path
from typing import Any, BinaryIO, Union

import pandas as pd

"""Workbook decoding.

- 先頭シートのみを読む (シート数の制約なし)
- 1行目をヘッダ行、2行目以降をデータ行として扱う (ヘッダの解釈は columns.py)
- 行/列数の上限は設けない (メモリ依存)

The grid keeps the decoder's cell types; stringification happens later at
cell extraction time.
"""

__all__ = [
    "DecodeError",
    "EmptyWorkbookError",
    "WorkbookSource",
    "read_first_sheet",
    "read_workbook_rows",
    "sheet_to_rows",
]

WorkbookSource = Union[str, Path, bytes, bytearray, BinaryIO]


class DecodeError(Exception):
    """Raised when the uploaded bytes cannot be interpreted as a spreadsheet."""


class EmptyWorkbookError(Exception):
    """Raised when the workbook decodes but its first sheet has no rows."""


def _as_excel_input(source: WorkbookSource) -> Any:
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


def read_first_sheet(source: WorkbookSource) -> pd.DataFrame:
    """Decode ``source`` and return the first worksheet as a raw DataFrame.

    Parameters
    ----------
    source: ファイルパス / bytes / バイナリファイルオブジェクト

    The sheet is read without a header so that row 0 is the header row.
    ``keep_default_na=False`` keeps literal strings such as "N/A" as text.
    """
    try:
        with pd.ExcelFile(_as_excel_input(source)) as xls:
            if not xls.sheet_names:
                df = pd.DataFrame()
            else:
                df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False)
    except Exception as e:
        raise DecodeError(str(e) or type(e).__name__) from e

    if df.shape[0] == 0:
        raise EmptyWorkbookError("No data found in Excel file")
    return df


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):  # pragma: no cover - array-like cells
        return False


def sheet_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a raw sheet DataFrame into a grid (list of rows).

    NaN / NaT cells become ``None``; every other cell keeps the decoder's value.
    """
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        rows.append([None if _is_missing(v) else v for v in raw])
    return rows


def read_workbook_rows(source: WorkbookSource) -> list[list[Any]]:
    return sheet_to_rows(read_first_sheet(source))
