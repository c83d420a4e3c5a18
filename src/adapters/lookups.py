"""
Lookup tables built from the auxiliary sheets of the stock workbook.

THIS FILE CONTAINS WORKBOOK-SPECIFIC HARDCODED LOGIC:
- Header names of each auxiliary sheet (Spanish, as exported)
- Urgency keywords of the marketplace replenishment plan
- Flag spellings of the basket block sheet

Every builder takes the raw sheet (row 0 = headers) and returns a mapping
keyed by normalized SKU. A missing or header-only sheet gives {}.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Callable, Sequence

from invcore.columns import ColumnIndex
from invcore.parsers import clean_string, is_missing, parse_number
from invcore.settings import BLOCKED_FLAGS, URGENT_KEYWORDS

logger = logging.getLogger(__name__)

Sheet = Sequence[Sequence[Any]]

ML_STATUS_COLUMNS = {
    "sku": ["SKU"],
    "boost": ["IMPULSAR"],
    "status": ["ESTADO DE PUBLICACION"],
    "quality": ["Calidad ok"],
}
CHARGES_COLUMNS = {
    "sku": ["SKU"],
    "units": ["Unidades"],
    "unit_charge": ["Cargo por unidad"],
    "date": ["FECHA"],
    "age": ["Antigüedad"],
}
ML_PLAN_COLUMNS = {
    "sku": ["SKU"],
    "recommendation": ["Recomendación"],
    "suggested": ["Unidades sugeridas", "sugeridas"],
}
SHIPMENTS_COLUMNS = {
    "sku": ["SKU"],
    "shipped": ["ENVIO REALIZADO"],
}
BASKET_COLUMNS = {
    "sku": ["SKU"],
    "flag": ["FLAG BLOQUEADOS", "BLOQUEADOS", "BLOQUEADO"],
}
MLA_COLUMNS = {
    "sku": ["SKU"],
    "code": ["MLA"],
    "status": ["ESTADO"],
}


@dataclass
class Lookups:
    """Container for the six SKU-keyed lookup tables."""

    ml_status: dict[str, dict] = field(default_factory=dict)
    charges: dict[str, dict] = field(default_factory=dict)
    ml_plan: dict[str, dict] = field(default_factory=dict)
    shipments: dict[str, float] = field(default_factory=dict)
    basket: dict[str, dict] = field(default_factory=dict)
    mla: dict[str, dict] = field(default_factory=dict)

    def summary(self) -> dict:
        return {name: len(table) for name, table in self.__dict__.items()}


def _has_data(sheet: Sheet | None) -> bool:
    return bool(sheet) and len(sheet) > 1


def _text(value: Any) -> str:
    return "" if is_missing(value) else str(value)


def _rows_with_sku(sheet: Sheet, index: ColumnIndex):
    """Yield (sku, row) for data rows whose SKU is not empty."""
    for row in sheet[1:]:
        sku = clean_string(index.cell(row, "sku"))
        if sku:
            yield sku, row


def build_ml_status(sheet: Sheet | None) -> dict[str, dict]:
    """Marketplace stock sheet: boost flag, publication status and quality."""
    if not _has_data(sheet):
        return {}
    index = ColumnIndex.resolve(sheet[0], ML_STATUS_COLUMNS)
    table = {}
    for sku, row in _rows_with_sku(sheet, index):
        table[sku] = {
            "boost": "SI" in _text(index.cell(row, "boost")),
            "status": index.cell(row, "status"),
            "quality": index.cell(row, "quality"),
        }
    return table


def build_charges(sheet: Sheet | None) -> dict[str, dict]:
    """
    Storage charges of the most recent date only.

    Rows from older dates are discarded, not merged: the sheet accumulates
    one block per billing date and only the current period matters. Without
    a date column every row counts.
    """
    if not _has_data(sheet):
        return {}
    index = ColumnIndex.resolve(sheet[0], CHARGES_COLUMNS)

    latest = 0
    if index.has("date"):
        for row in sheet[1:]:
            value = index.cell(row, "date")
            if isinstance(value, Real) and not isinstance(value, bool) and value > latest:
                latest = value

    table = {}
    for row in sheet[1:]:
        if index.has("date") and index.cell(row, "date") != latest:
            continue
        sku = clean_string(index.cell(row, "sku"))
        if not sku:
            continue
        entry = table.setdefault(sku, {"amount": 0.0, "units": 0.0, "age": ""})
        units = parse_number(index.cell(row, "units"))
        unit_charge = parse_number(index.cell(row, "unit_charge"))
        entry["units"] += units
        entry["amount"] += units * unit_charge
        age = index.cell(row, "age")
        if not is_missing(age) and age != "":
            entry["age"] = age
    return table


def build_ml_plan(sheet: Sheet | None) -> dict[str, dict]:
    """Replenishment plan: recommendation text, suggested units, urgency."""
    if not _has_data(sheet):
        return {}
    index = ColumnIndex.resolve(sheet[0], ML_PLAN_COLUMNS)
    table = {}
    for sku, row in _rows_with_sku(sheet, index):
        text = _text(index.cell(row, "recommendation"))
        lowered = text.lower()
        table[sku] = {
            "recommendation": text,
            "suggested": parse_number(index.cell(row, "suggested")),
            "urgent": any(keyword in lowered for keyword in URGENT_KEYWORDS),
        }
    return table


def build_shipments(sheet: Sheet | None) -> dict[str, float]:
    """Units already shipped to the marketplace warehouse, summed per SKU."""
    if not _has_data(sheet):
        return {}
    index = ColumnIndex.resolve(sheet[0], SHIPMENTS_COLUMNS)
    table: dict[str, float] = {}
    for sku, row in _rows_with_sku(sheet, index):
        table[sku] = table.get(sku, 0.0) + parse_number(index.cell(row, "shipped"))
    return table


def build_basket(sheet: Sheet | None) -> dict[str, dict]:
    if not _has_data(sheet):
        return {}
    index = ColumnIndex.resolve(sheet[0], BASKET_COLUMNS)
    table = {}
    for sku, row in _rows_with_sku(sheet, index):
        flag = clean_string(index.cell(row, "flag"))
        table[sku] = {"blocked": flag in BLOCKED_FLAGS}
    return table


def build_mla(sheet: Sheet | None) -> dict[str, dict]:
    """Marketplace publication codes (depot 80) and their status."""
    if not _has_data(sheet):
        return {}
    index = ColumnIndex.resolve(sheet[0], MLA_COLUMNS)
    table = {}
    for sku, row in _rows_with_sku(sheet, index):
        table[sku] = {
            "code": clean_string(index.cell(row, "code")),
            "status": clean_string(index.cell(row, "status")),
        }
    return table


BUILDERS: dict[str, tuple[str, Callable[[Sheet | None], dict]]] = {
    "sml": ("ml_status", build_ml_status),
    "cargos": ("charges", build_charges),
    "pml": ("ml_plan", build_ml_plan),
    "enviados": ("shipments", build_shipments),
    "canasta": ("basket", build_basket),
    "mla": ("mla", build_mla),
}


def build_lookups(sheets: dict[str, Sheet], isolate_failures: bool = True) -> Lookups:
    """
    Build all six lookups from sheets keyed by kind ("sml", "cargos", ...).

    With isolate_failures, a builder that raises is logged and leaves only
    its own table empty.
    """
    lookups = Lookups()
    for kind, (attr, builder) in BUILDERS.items():
        sheet = sheets.get(kind)
        try:
            table = builder(sheet)
        except Exception as e:
            if not isolate_failures:
                raise
            logger.warning("Lookup '%s' failed (%s); continuing without it", kind, e)
            table = {}
        setattr(lookups, attr, table)
        if _has_data(sheet):
            logger.info("Lookup '%s': %d SKUs from %d rows", kind, len(table), len(sheet) - 1)
    return lookups
