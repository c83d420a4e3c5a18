"""
Record types produced by consolidation and annotated by the analytics steps.
"""

from __future__ import annotations

import itertools
from dataclasses import asdict, dataclass, field
from typing import Iterable

import pandas as pd

from .settings import DEFAULT_LEAD_TIME, DEFAULT_PROFILE, DEFAULT_UNITS_PER_BOX, PLACEHOLDER

# Process-wide, so ids stay unique across several consolidations
_row_ids = itertools.count(1)


def next_row_id() -> str:
    return f"r{next(_row_ids)}"


@dataclass
class SkuRecord:
    """Everything known about one SKU after consolidating the primary sheet."""

    sku: str
    description: str = PLACEHOLDER
    brand: str = PLACEHOLDER
    supplier: str = PLACEHOLDER
    analyst: str = PLACEHOLDER
    profile: str = DEFAULT_PROFILE

    unit_cost: float = 0.0
    lead_time: float = DEFAULT_LEAD_TIME
    purchase_velocity: float = 0.0
    units_per_box: float = DEFAULT_UNITS_PER_BOX

    vtar_total: float = 0.0
    vtar_80: float = 0.0
    vtar_1: float = 0.0
    vtar_branches: float = 0.0
    stock_grafana: float = 0.0
    in_transit: float = 0.0
    sold_59d: float = 0.0
    vtar_breakdown: dict[str, float] = field(default_factory=dict)

    # Chronological: oldest day first, yesterday last
    hist_daily: list[float] = field(default_factory=list)
    vtar_15: float = 0.0
    vtar_30: float = 0.0
    vtar_45: float = 0.0
    vtar_60: float = 0.0
    seasonal_multiplier: float = 1.0

    forecast: float = 0.0
    is_anomaly: bool = False
    std_dev: float = 0.0
    cv: float = 0.0
    stability: str = ""

    days_of_stock: float = 0.0
    abc: str = ""
    abc_xyz: str = ""
    health: str = ""

    @property
    def sales_value(self) -> float:
        return self.vtar_total * self.unit_cost

    @property
    def stock_value(self) -> float:
        return self.stock_grafana * self.unit_cost

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FlatRow:
    """One primary-sheet row, denormalized for the detail view."""

    id: str
    sku: str
    description: str
    brand: str
    supplier: str
    depot: str
    vtar: float
    stock: float
    sold_59d: float
    days_of_stock_depot: float
    unit_cost: float
    analyst: str

    def to_dict(self) -> dict:
        return asdict(self)


def records_frame(records: Iterable[SkuRecord]) -> pd.DataFrame:
    """Tabular view of SKU records for display and export."""
    rows = [r.to_dict() for r in records]
    frame = pd.DataFrame(rows)
    if not frame.empty:
        frame = frame.drop(columns=["hist_daily", "vtar_breakdown"])
    return frame
