"""
Serializable documents handed to the persistence and dashboard layers.

Uses Pydantic models so stored history and summaries have a fixed,
validated shape regardless of how the records were produced.
"""

from __future__ import annotations

from datetime import date as date_type

from pydantic import BaseModel, Field

from .classification import ClassificationResult


class InventorySnapshot(BaseModel):
    """Demand per SKU on a given day, kept for history comparisons."""

    date: date_type = Field(default_factory=date_type.today)
    demand: dict[str, float] = Field(description="Total VTAR per normalized SKU")

    @property
    def total_demand(self) -> float:
        return sum(self.demand.values())

    def delta(self, previous: "InventorySnapshot") -> dict[str, float]:
        """Demand change per SKU against an older snapshot (new SKUs start from 0)."""
        return {
            sku: value - previous.demand.get(sku, 0.0)
            for sku, value in self.demand.items()
        }


class DashboardSummary(BaseModel):
    """Headline numbers of one classification run."""

    sku_count: int
    total_sales_value: float = Field(description="Sum of demand x unit cost")
    total_stock_value: float = Field(description="Sum of stock x unit cost")
    matrix: dict[str, dict[str, float]] = Field(
        description="Stock value by ABC class and health bucket"
    )
    counts: dict[str, int] = Field(description="SKU count per combined ABC/XYZ class")

    @classmethod
    def from_classification(cls, result: ClassificationResult) -> "DashboardSummary":
        return cls(
            sku_count=len(result.records),
            total_sales_value=result.total_sales_value,
            total_stock_value=result.total_stock_value,
            matrix=result.matrix,
            counts=result.counts,
        )
