from __future__ import annotations

import io
import math
from datetime import date, datetime, time
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..errors import DecodeError, EmptyFileError, UnsupportedFormatError
from ..models import ProductRecord
from .column_aliases import normalize_header
from .row_normalizer import normalize


DELIMITED_SUFFIXES = (".csv",)
SPREADSHEET_SUFFIXES = (".xlsx", ".xls")


def detect_file_format(file_name: str) -> str:
    """Return ``"delimited"`` or ``"spreadsheet"`` from the file suffix alone.

    No content sniffing is done; the comparison is case-insensitive.
    """

    lowered = str(file_name).strip().lower()
    if lowered.endswith(DELIMITED_SUFFIXES):
        return "delimited"
    if lowered.endswith(SPREADSHEET_SUFFIXES):
        return "spreadsheet"
    raise UnsupportedFormatError(file_name)


def _cell_to_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if value is pd.NaT:
        return ""
    if isinstance(value, (pd.Timestamp, datetime)):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _frame_to_rows(df: pd.DataFrame) -> List[Dict[str, str]]:
    """Convert a frame of raw cells into text rows keyed by normalized header.

    Every header is kept on every row (empty cells become ""); rows with no
    non-blank cell are dropped.
    """

    headers = [normalize_header(c) for c in df.columns]
    rows: List[Dict[str, str]] = []
    for values in df.itertuples(index=False, name=None):
        row = {h: _cell_to_text(v) for h, v in zip(headers, values)}
        if any(text.strip() for text in row.values()):
            rows.append(row)
    return rows


def read_delimited_rows(data: bytes, file_name: str = "input.csv") -> List[Dict[str, str]]:
    """Decode UTF-8 comma-delimited text with a header row."""

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(file_name, "file is not valid UTF-8 text") from exc
    if not text.strip():
        raise EmptyFileError(file_name)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
        )
    except pd.errors.EmptyDataError as exc:
        raise EmptyFileError(file_name) from exc
    except (pd.errors.ParserError, ValueError) as exc:
        raise DecodeError(file_name, str(exc)) from exc
    return _frame_to_rows(df)


def read_spreadsheet_rows(data: bytes, file_name: str = "input.xlsx") -> List[Dict[str, str]]:
    """Read the first sheet of an .xlsx/.xls workbook with every cell as text."""

    if not data:
        raise EmptyFileError(file_name)
    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=0, dtype=object, na_filter=False)
    except Exception as exc:
        # openpyxl, xlrd and zipfile each raise their own types for corrupt input
        raise DecodeError(file_name, str(exc) or type(exc).__name__) from exc
    return _frame_to_rows(df)


def ingest(file_bytes: bytes, file_name: str, ingestion_date: Optional[date] = None) -> List[ProductRecord]:
    """Decode an uploaded file and normalize it into canonical product records.

    All-or-nothing: any decode or validation failure raises an
    :class:`~shelfrank.errors.IngestionError` and no records are returned.
    """

    kind = detect_file_format(file_name)
    if kind == "delimited":
        rows = read_delimited_rows(file_bytes, file_name)
    else:
        rows = read_spreadsheet_rows(file_bytes, file_name)
    if not rows:
        raise EmptyFileError(file_name)
    return normalize(rows, ingestion_date=ingestion_date)


def ingest_path(path: str | Path, ingestion_date: Optional[date] = None) -> List[ProductRecord]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input not found: {p}")
    detect_file_format(p.name)
    try:
        data = p.read_bytes()
    except OSError as exc:
        raise DecodeError(p.name, str(exc)) from exc
    return ingest(data, p.name, ingestion_date=ingestion_date)
