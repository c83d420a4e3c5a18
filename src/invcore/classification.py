"""
ABC/XYZ classification and the stock-health value matrix.

ABC ranks SKUs by sales value (demand x unit cost) on a Pareto curve,
XYZ reuses the stability class from the analytics step, and the health
matrix spreads stock value over ABC class x days-of-stock bucket.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd

from .analysis import STABLE, VARIABLE
from .records import SkuRecord
from .settings import ABC_A_LIMIT, ABC_B_LIMIT, ABC_CLASSES, HEALTH_BUCKETS

logger = logging.getLogger(__name__)

HEALTH_LABELS = [label for label, _ in HEALTH_BUCKETS]


def abc_class(cumulative_fraction: float) -> str:
    if cumulative_fraction <= ABC_A_LIMIT:
        return "A"
    if cumulative_fraction <= ABC_B_LIMIT:
        return "B"
    return "C"


def xyz_class(stability: str) -> str:
    if stability == STABLE:
        return "X"
    if stability == VARIABLE:
        return "Y"
    return "Z"


def health_bucket(days_of_stock: float) -> str:
    """Map days of stock to its bucket; the last bucket has no upper bound."""
    for label, upper in HEALTH_BUCKETS:
        if upper is None or days_of_stock <= upper:
            return label
    return HEALTH_LABELS[-1]


def empty_matrix() -> dict[str, dict[str, float]]:
    return {abc: {label: 0.0 for label in HEALTH_LABELS} for abc in ABC_CLASSES}


@dataclass
class ClassificationResult:
    """Stock-value matrix, combined-class counts and the ranked records."""

    matrix: dict[str, dict[str, float]] = field(default_factory=empty_matrix)
    counts: dict[str, int] = field(default_factory=dict)
    records: list[SkuRecord] = field(default_factory=list)
    total_sales_value: float = 0.0

    @property
    def total_stock_value(self) -> float:
        return sum(sum(row.values()) for row in self.matrix.values())

    def matrix_frame(self) -> pd.DataFrame:
        """Matrix as a DataFrame: rows A/B/C, columns in bucket order."""
        return pd.DataFrame.from_dict(self.matrix, orient="index").reindex(
            index=list(ABC_CLASSES), columns=HEALTH_LABELS
        )


def classify_abc_and_health(records: list[SkuRecord]) -> ClassificationResult:
    """
    Rank records by sales value and annotate abc, abc_xyz and health.

    The list is sorted in place (descending sales value, ties keep their
    input order). Each record needs days_of_stock assigned beforehand.
    """
    total_sales = sum(r.sales_value for r in records)
    records.sort(key=lambda r: r.sales_value, reverse=True)

    result = ClassificationResult(records=records, total_sales_value=total_sales)
    running = 0.0
    for record in records:
        running += record.sales_value
        fraction = running / total_sales if total_sales else 0.0
        record.abc = abc_class(fraction)
        record.abc_xyz = record.abc + xyz_class(record.stability)
        result.counts[record.abc_xyz] = result.counts.get(record.abc_xyz, 0) + 1

        record.health = health_bucket(record.days_of_stock)
        result.matrix[record.abc][record.health] += record.stock_value

    logger.info(
        "Classified %d SKUs: %s",
        len(records),
        ", ".join(f"{k}={v}" for k, v in sorted(result.counts.items())),
    )
    return result
