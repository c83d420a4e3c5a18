"""
End-to-end run over one uploaded workbook.

Order of steps:
1. Auxiliary lookups (each sheet kind fails on its own)
2. Grafana consolidation (fatal errors propagate to the caller)
3. Time-series analytics per SKU
4. Days of stock per SKU
5. ABC/XYZ classification and health matrix
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from invcore.analysis import enrich_all
from invcore.classification import ClassificationResult, classify_abc_and_health
from invcore.quality import SheetQualityReport
from invcore.records import FlatRow, SkuRecord
from invcore.snapshot import DashboardSummary, InventorySnapshot

from .grafana import consolidate, days_of_stock, generate_snapshot
from .lookups import Lookups, build_lookups

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Container for everything one workbook produces."""

    records: dict[str, SkuRecord]
    flat_rows: list[FlatRow]
    lookups: Lookups
    classification: ClassificationResult
    snapshot: InventorySnapshot
    quality: SheetQualityReport

    def summary(self) -> DashboardSummary:
        return DashboardSummary.from_classification(self.classification)


def assign_days_of_stock(records: Iterable[SkuRecord]) -> None:
    """Total stock over total demand, with the same sentinels as the detail rows."""
    for record in records:
        record.days_of_stock = days_of_stock(record.stock_grafana, record.vtar_total)


def run_pipeline(sheets: dict[str, Sequence[Sequence[Any]]]) -> PipelineResult:
    """
    Process sheets keyed by kind (see adapters.workbook.map_sheet_kinds).

    Raises:
        SheetError: the Grafana sheet is missing, empty or lacks required columns
    """
    lookups = build_lookups(sheets)
    logger.info("Lookups built: %s", lookups.summary())

    raw_grafana = sheets.get("grafana")
    grafana = consolidate(raw_grafana)

    records = list(grafana.records.values())
    enrich_all(records)
    assign_days_of_stock(records)
    classification = classify_abc_and_health(records)

    return PipelineResult(
        records=grafana.records,
        flat_rows=grafana.flat_rows,
        lookups=lookups,
        classification=classification,
        snapshot=InventorySnapshot(demand=generate_snapshot(raw_grafana)),
        quality=grafana.quality,
    )
