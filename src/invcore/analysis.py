"""
Time-series analytics for SKU demand history.

Computes, per SKU:
- Next-day forecast from a least-squares linear trend
- Anomaly flag (z-score of the most recent day)
- Standard deviation and coefficient of variation
- Stability class (Inactive / Stable / Variable / Erratic / No-data)
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np

from .records import SkuRecord
from .settings import (
    ANOMALY_Z_SCORE,
    MIN_ANOMALY_POINTS,
    MIN_FORECAST_POINTS,
    STABLE_CV,
    VARIABLE_CV,
)

logger = logging.getLogger(__name__)

INACTIVE = "Inactive"
STABLE = "Stable"
VARIABLE = "Variable"
ERRATIC = "Erratic"
NO_DATA = "No-data"


def linear_regression(y: Sequence[float]) -> tuple[float, float, float]:
    """
    Fit y = slope * x + intercept over x = 0..n-1.

    Returns (slope, intercept, next_value) where next_value is the fitted
    value at x = n.
    """
    n = len(y)
    if n == 0:
        return 0.0, 0.0, 0.0

    values = np.asarray(y, dtype=float)
    x = np.arange(n, dtype=float)
    sum_x = x.sum()
    sum_y = values.sum()
    sum_xy = (x * values).sum()
    sum_xx = (x * x).sum()

    denominator = n * sum_xx - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator else 0.0
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept), float(slope * n + intercept)


def standard_deviation(values: Sequence[float], mean: float | None = None) -> float:
    """Population standard deviation (divides by n). Empty input gives 0."""
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    center = arr.mean() if mean is None else mean
    return float(np.sqrt(((arr - center) ** 2).sum() / len(arr)))


def detect_anomaly(series: Sequence[float]) -> bool:
    """True when the last value sits more than ANOMALY_Z_SCORE deviations from the mean."""
    if len(series) < MIN_ANOMALY_POINTS:
        return False
    arr = np.asarray(series, dtype=float)
    std = standard_deviation(arr)
    if std == 0:
        return False
    z_score = abs((arr[-1] - arr.mean()) / std)
    return bool(z_score > ANOMALY_Z_SCORE)


def classify_stability(total_demand: float, cv: float) -> str:
    if total_demand == 0:
        return INACTIVE
    if cv < STABLE_CV:
        return STABLE
    if cv < VARIABLE_CV:
        return VARIABLE
    return ERRATIC


def enrich_with_analytics(record: SkuRecord) -> SkuRecord:
    """
    Set forecast, anomaly, deviation, CV and stability on a record in place.

    The record's hist_daily is expected oldest-first.
    """
    series = record.hist_daily

    if len(series) > MIN_FORECAST_POINTS:
        _, _, next_value = linear_regression(series)
        record.forecast = max(0.0, next_value)
        record.is_anomaly = detect_anomaly(series)
    else:
        record.forecast = 0.0
        record.is_anomaly = False

    if series:
        record.std_dev = standard_deviation(series)
        record.cv = record.std_dev / record.vtar_total if record.vtar_total > 0 else 0.0
        record.stability = classify_stability(record.vtar_total, record.cv)
    else:
        record.std_dev = 0.0
        record.cv = 0.0
        record.stability = NO_DATA

    return record


def enrich_all(records: Iterable[SkuRecord]) -> int:
    """Enrich every record; returns how many were flagged as anomalies."""
    anomalies = 0
    count = 0
    for record in records:
        enrich_with_analytics(record)
        anomalies += record.is_anomaly
        count += 1
    logger.info("Enriched %d SKUs (%d anomalies)", count, anomalies)
    return anomalies
