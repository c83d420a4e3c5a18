"""
Central configuration for thresholds, defaults and sheet aliases.

This module defines:
- Classification cut-offs (ABC cumulative value, health buckets, stability CV).
- Time-series parameters (rolling windows, history depth, anomaly z-score).
- Record defaults applied when the primary sheet leaves a field blank.
- Sheet-name aliases used to recognise each sheet kind in an uploaded workbook.

All values are constants and should be imported where needed (no runtime logic here).
"""

from __future__ import annotations

import os


LOG_LEVEL = os.getenv("INVCORE_LOG_LEVEL", "INFO").upper()

# Primary sheet
TOTAL_MARKER = "TOTAL"
HISTORY_DAYS = 60
ROLLING_WINDOWS = (15, 30, 45, 60)
BREAKDOWN_DEPOTS = ("82", "86", "87", "89")
NO_DEMAND_DAYS = 999

DEFAULT_LEAD_TIME = 30
DEFAULT_UNITS_PER_BOX = 1
DEFAULT_PROFILE = "Sin Clasificar"
PLACEHOLDER = "-"

# Analytics
MIN_FORECAST_POINTS = 5
MIN_ANOMALY_POINTS = 5
ANOMALY_Z_SCORE = 2.5
STABLE_CV = 0.3
VARIABLE_CV = 0.7

# Classification
ABC_A_LIMIT = 0.8
ABC_B_LIMIT = 0.95
ABC_CLASSES = ("A", "B", "C")

# Upper bound (inclusive) of days of stock for each health bucket; the last
# bucket catches everything above.
HEALTH_BUCKETS = (
    ("critical-low", 10),
    ("low", 17),
    ("healthy", 30),
    ("excess", 45),
    ("obsolete", None),
)

URGENT_KEYWORDS = ("urgencia", "perdiendo")
BLOCKED_FLAGS = {"SI", "SÍ", "S"}

# Workbook sheet kinds -> substrings accepted in the sheet name
SHEET_ALIASES = {
    "grafana": ["GRAFANA"],
    "sml": ["STOCK ML", "SML"],
    "cargos": ["CARGOS"],
    "pml": ["PLAN ML", "PML"],
    "enviados": ["ENVIADOS", "ENVIOS", "ENVÍOS"],
    "canasta": ["CANASTA"],
    "mla": ["MLA"],
}
