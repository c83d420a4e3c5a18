"""
WORKBOOK READER
---------------
Reads an .xlsx upload into raw sheets (lists of rows) with NO transformation,
then recognises which sheet is which by name.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

from invcore.columns import find_column_index
from invcore.parsers import date_to_excel_serial
from invcore.settings import SHEET_ALIASES

logger = logging.getLogger(__name__)

RawSheets = dict[str, list[list[Any]]]


def _frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Rows as plain lists, empty cells as None and dates as Excel serials."""
    df = df.astype(object).where(pd.notna(df), None)
    return [[date_to_excel_serial(v) for v in row] for row in df.values.tolist()]


def read_workbook(source: Path | str | BinaryIO) -> RawSheets:
    """
    Read every sheet of a workbook; row 0 of each sheet is its header row.

    Args:
        source: Path to the file or a file-like upload

    Raises:
        FileNotFoundError: If a path is given and doesn't exist
        ValueError: If the file is empty or not a valid Excel file
    """
    name = getattr(source, "name", str(source))
    if isinstance(source, (str, Path)):
        path = Path(source).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"Excel file not found: {path}")
        content = path.read_bytes()
    else:
        try:
            source.seek(0)
        except (AttributeError, OSError):
            pass
        content = source.read()

    if not content:
        raise ValueError(f"Uploaded file '{name}' is empty. Please re-upload your .xlsx")

    try:
        frames = pd.read_excel(
            io.BytesIO(content), sheet_name=None, header=None, engine="openpyxl"
        )
    except Exception as e:
        raise ValueError(f"Could not read '{name}' as .xlsx: {e}") from e

    sheets = {sheet: _frame_to_rows(df) for sheet, df in frames.items()}
    for sheet, rows in sheets.items():
        logger.info("Loaded '%s' (%d rows)", sheet, max(len(rows) - 1, 0))
    return sheets


def map_sheet_kinds(sheets: RawSheets) -> RawSheets:
    """
    Key sheets by kind ("grafana", "cargos", ...) instead of by tab name.

    Tab names are matched like column headers: case-insensitive substring
    against SHEET_ALIASES, first tab wins. Tabs of no known kind are dropped.
    """
    names = list(sheets)
    by_kind: RawSheets = {}
    for kind, aliases in SHEET_ALIASES.items():
        position = find_column_index(names, aliases)
        if position > -1:
            by_kind[kind] = sheets[names[position]]

    matched = {id(rows) for rows in by_kind.values()}
    for name in names:
        if id(sheets[name]) not in matched:
            logger.debug("Ignoring sheet '%s' (no known kind)", name)
    return by_kind
