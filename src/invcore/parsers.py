"""
Reusable parsers for spreadsheet cell values.

These parsers handle the messy reality of exported stock sheets:
- Numbers typed as text in AR/EU ("1.234,56") or US ("1,234.56") notation
- Currency symbols and stray whitespace inside numeric cells
- SKU codes that arrive as numbers, padded strings or lower case
- Excel serial dates
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any

import pandas as pd


# Thousands '.' and decimal ',' (AR/EU): 1.234,56
_AR_NUMBER = re.compile(r"^\d{1,3}(\.\d{3})*,\d+$")
# Thousands ',' and decimal '.' (US): 1,234.56
_US_NUMBER = re.compile(r"^\d{1,3}(,\d{3})*\.\d+$")
# Leading float prefix, the way spreadsheet tools read "12.5 u" as 12.5
_FLOAT_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_STRIP_CHARS = re.compile(r"[$€£\s]")

_EXCEL_EPOCH_OFFSET = 25569  # days between 1899-12-30 and 1970-01-01


def is_missing(value: Any) -> bool:
    """True for None, NaN/NaT and other pandas-recognised empty scalars."""
    if value is None:
        return True
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def clean_string(value: Any) -> str:
    """
    Canonical text form of a cell: trimmed and upper-cased.

    Empty cells and numeric zero give "". Integral floats lose their ".0"
    so a SKU read as 12345.0 matches the same SKU typed as text.
    """
    if is_missing(value):
        return ""
    if isinstance(value, Real) and not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().upper()


def parse_number(value: Any) -> float:
    """
    Parse a cell into a float, tolerating AR/EU and US notation.

        parse_number("1.234,56")  -> 1234.56
        parse_number("1,234.56")  -> 1234.56
        parse_number("0,117")     -> 0.117
        parse_number("n/a")       -> 0.0

    Never raises: anything unparseable is 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, Real):
        return 0.0 if math.isnan(value) else value
    if is_missing(value) or value == "":
        return 0.0

    s = _STRIP_CHARS.sub("", str(value))
    if _AR_NUMBER.match(s):
        s = s.replace(".", "").replace(",", ".", 1)
    elif _US_NUMBER.match(s):
        s = s.replace(",", "")
    elif "," in s:
        s = s.replace(",", ".", 1)

    match = _FLOAT_PREFIX.match(s)
    if not match:
        return 0.0
    try:
        result = float(match.group(0))
    except ValueError:
        return 0.0
    return result if math.isfinite(result) else 0.0


def format_money(value: Any) -> str:
    """Format an amount as AR currency without decimals: "$ 1.234.567"."""
    amount = value if isinstance(value, Real) and not is_missing(value) else 0
    rounded = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return "$ " + f"{rounded:,}".replace(",", ".")


def excel_serial_to_date(serial: Any) -> Any:
    """
    Convert an Excel serial date (44562) to "DD/MM/YYYY" ("01/01/2022").

    Values that are not numeric serials are returned unchanged.
    """
    if isinstance(serial, bool) or not isinstance(serial, Real):
        return serial
    if is_missing(serial) or not serial:
        return serial
    days = math.floor(serial - _EXCEL_EPOCH_OFFSET)
    date = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(days=days)
    return date.strftime("%d/%m/%Y")


def date_to_excel_serial(value: Any) -> Any:
    """
    Convert a datetime cell back to its Excel serial (2024-01-01 -> 45292.0).

    The time of day is kept as the fractional part. Other values are
    returned unchanged.
    """
    if not isinstance(value, datetime) or is_missing(value):
        return value
    delta = pd.Timestamp(value).tz_localize(None) - pd.Timestamp("1970-01-01")
    return _EXCEL_EPOCH_OFFSET + delta / pd.Timedelta(days=1)
