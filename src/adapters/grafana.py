"""
Consolidation of the primary "Grafana" sales/stock sheet.

THIS FILE CONTAINS WORKBOOK-SPECIFIC HARDCODED LOGIC:
- Header names of the Grafana export (Spanish, decorated, reordered at will)
- Depot naming: "80"/"FULL" is the marketplace warehouse, "1"/"CENTRAL" the
  central warehouse, everything else a branch
- Daily history exported as columns "-1" (yesterday) .. "-60"

One row per SKU and depot comes in; one SkuRecord per SKU and one FlatRow
per input row come out, in a single pass.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from invcore.columns import ColumnIndex, resolve_offset_columns
from invcore.parsers import clean_string, is_missing, parse_number
from invcore.quality import EmptySheetError, SheetQualityReport, validate_sheet
from invcore.records import FlatRow, SkuRecord, next_row_id
from invcore.settings import (
    BREAKDOWN_DEPOTS,
    DEFAULT_LEAD_TIME,
    DEFAULT_PROFILE,
    DEFAULT_UNITS_PER_BOX,
    HISTORY_DAYS,
    NO_DEMAND_DAYS,
    PLACEHOLDER,
    ROLLING_WINDOWS,
    TOTAL_MARKER,
)

logger = logging.getLogger(__name__)

SHEET_NAME = "Grafana"
REQUIRED_COLUMNS = ["SKU", "VTAR", "Stock"]

GRAFANA_COLUMNS = {
    "sku": ["SKU"],
    "depot": ["Deposito"],
    "vtar": ["VTAR"],
    "purchase_velocity": ["VPD_Cpra"],
    "description": ["Descripcion"],
    "brand": ["Marca"],
    "supplier": ["Proveedor", "Prov"],
    "analyst": ["Analista"],
    "cost": ["Costo", "Reposición"],
    "lead_time": ["Lead"],
    "stock": ["Stock"],
    "units_per_box": ["UXB"],
    "in_transit": ["COMPRAS"],
    "sold_59d": ["TOTAL VENDIDO", "59 DÍAS", "VENDIDO 59"],
    "profile": ["Perfil"],
}

# Numeric columns whose text cells are checked for unparseable values
_NUMERIC_COLUMNS = ("vtar", "stock", "sold_59d", "in_transit", "cost")
_DIGIT = re.compile(r"\d+")

Sheet = Sequence[Sequence[Any]]


@dataclass
class GrafanaResult:
    """Output of one consolidation."""

    records: dict[str, SkuRecord] = field(default_factory=dict)
    flat_rows: list[FlatRow] = field(default_factory=list)
    quality: SheetQualityReport = field(
        default_factory=lambda: SheetQualityReport(SHEET_NAME)
    )


def _text(value: Any, default: str = PLACEHOLDER) -> str:
    if is_missing(value):
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip() or default


def rolling_average(recent_first: Sequence[float], days: int) -> float:
    """
    Average of the most recent `days` values, always divided by `days`.

    A SKU with only 10 days of history gets its 30-day average divided by
    30, which pulls new SKUs toward zero. Downstream thresholds are tuned to
    this, so it is kept as is.
    """
    window = recent_first[:days]
    if days <= 0 or not window:
        return 0.0
    return sum(window) / days


def depot_bucket(depot: str) -> str:
    """Classify a cleaned depot label: "full", "central" or "branch"."""
    if "80" in depot or "FULL" in depot:
        return "full"
    if "1" in depot or "CENTRAL" in depot:
        return "central"
    return "branch"


def depot_code(depot: str) -> str:
    """First number embedded in the depot label, or ""."""
    match = _DIGIT.search(depot)
    return match.group(0) if match else ""


def days_of_stock(stock: float, demand: float) -> float:
    """Runway in days; 999 when there is stock but no demand, 0 when both are 0."""
    if demand > 0:
        return stock / demand
    return NO_DEMAND_DAYS if stock > 0 else 0


def _new_record(sku: str, row: Sequence[Any], index: ColumnIndex) -> SkuRecord:
    return SkuRecord(
        sku=sku,
        description=_text(index.cell(row, "description")),
        brand=_text(index.cell(row, "brand")),
        supplier=_text(index.cell(row, "supplier")),
        analyst=_text(index.cell(row, "analyst")),
        profile=_text(index.cell(row, "profile"), DEFAULT_PROFILE),
        unit_cost=parse_number(index.cell(row, "cost")),
        lead_time=parse_number(index.cell(row, "lead_time")) or DEFAULT_LEAD_TIME,
        purchase_velocity=parse_number(index.cell(row, "purchase_velocity")),
        units_per_box=parse_number(index.cell(row, "units_per_box")) or DEFAULT_UNITS_PER_BOX,
    )


def _capture_history(
    record: SkuRecord, row: Sequence[Any], offsets: list[tuple[int, int]]
) -> None:
    recent_first = [
        parse_number(row[pos]) if pos < len(row) else 0.0 for pos, _ in offsets
    ]
    record.hist_daily = list(reversed(recent_first))
    record.vtar_15, record.vtar_30, record.vtar_45, record.vtar_60 = (
        rolling_average(recent_first, days) for days in ROLLING_WINDOWS
    )


def _check_numbers(row: Sequence[Any], index: ColumnIndex, report: SheetQualityReport) -> None:
    for column in _NUMERIC_COLUMNS:
        raw = index.cell(row, column)
        if isinstance(raw, str) and raw.strip() and not _DIGIT.search(raw):
            report.record_unparsed(column, raw)


def consolidate(raw_grafana: Sheet | None) -> GrafanaResult:
    """
    Aggregate the Grafana sheet into SKU records and flat detail rows.

    Raises:
        EmptySheetError: the sheet has no data rows
        MissingColumnsError: SKU, VTAR or Stock cannot be found (all listed)
    """
    if not raw_grafana or len(raw_grafana) < 2:
        raise EmptySheetError(SHEET_NAME)

    header = raw_grafana[0]
    validate_sheet(header, REQUIRED_COLUMNS, SHEET_NAME)

    index = ColumnIndex.resolve(header, GRAFANA_COLUMNS)
    offsets = resolve_offset_columns(header, HISTORY_DAYS)

    result = GrafanaResult()
    result.quality.total_rows = len(raw_grafana) - 1
    result.quality.record_missing_columns(index)
    records = result.records

    for row in raw_grafana[1:]:
        sku = clean_string(index.cell(row, "sku"))
        if not sku or sku == TOTAL_MARKER:
            continue

        _check_numbers(row, index, result.quality)
        depot = clean_string(index.cell(row, "depot"))
        vtar = parse_number(index.cell(row, "vtar"))
        stock = parse_number(index.cell(row, "stock"))
        sold_59d = parse_number(index.cell(row, "sold_59d"))

        record = records.get(sku)
        if record is None:
            record = records[sku] = _new_record(sku, row, index)

        if offsets and not record.hist_daily:
            _capture_history(record, row, offsets)

        code = depot_code(depot)
        if code in BREAKDOWN_DEPOTS:
            record.vtar_breakdown[code] = record.vtar_breakdown.get(code, 0.0) + vtar

        record.vtar_total += vtar
        record.stock_grafana += stock
        record.sold_59d += sold_59d
        record.in_transit += parse_number(index.cell(row, "in_transit"))

        bucket = depot_bucket(depot)
        if bucket == "full":
            record.vtar_80 += vtar
        elif bucket == "central":
            record.vtar_1 += vtar
        else:
            record.vtar_branches += vtar

        result.flat_rows.append(
            FlatRow(
                id=next_row_id(),
                sku=sku,
                description=_text(index.cell(row, "description"), record.description),
                brand=_text(index.cell(row, "brand")),
                supplier=_text(index.cell(row, "supplier")),
                depot=depot,
                vtar=vtar,
                stock=stock,
                sold_59d=sold_59d,
                days_of_stock_depot=days_of_stock(stock, vtar),
                unit_cost=parse_number(index.cell(row, "cost")),
                analyst=_text(index.cell(row, "analyst")),
            )
        )

    logger.info(
        "Consolidated %s: %d rows -> %d SKUs, %d history days",
        SHEET_NAME,
        len(result.flat_rows),
        len(records),
        len(offsets),
    )
    result.quality.log()
    return result


def generate_snapshot(raw_grafana: Sheet | None) -> dict[str, float]:
    """
    Total VTAR per SKU, for the dated demand history.

    Best effort: any failure is logged and gives an empty snapshot, so a
    broken history never blocks the main analysis.
    """
    try:
        header = raw_grafana[0]
        index = ColumnIndex.resolve(header, {"sku": ["SKU"], "vtar": ["VTAR"]})
        snapshot: dict[str, float] = {}
        for row in raw_grafana[1:]:
            sku = clean_string(index.cell(row, "sku"))
            if sku and sku != TOTAL_MARKER:
                snapshot[sku] = snapshot.get(sku, 0.0) + parse_number(index.cell(row, "vtar"))
        return snapshot
    except Exception:
        logger.exception("Could not generate demand snapshot")
        return {}
