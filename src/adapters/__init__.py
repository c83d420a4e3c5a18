# Workbook-specific data adapters
# Each module holds the hardcoded header names and sheet rules of the stock workbook

from .grafana import GrafanaResult, consolidate, generate_snapshot
from .lookups import Lookups, build_lookups
from .workbook import read_workbook, map_sheet_kinds
from .pipeline import PipelineResult, run_pipeline

__all__ = [
    "GrafanaResult",
    "consolidate",
    "generate_snapshot",
    "Lookups",
    "build_lookups",
    "read_workbook",
    "map_sheet_kinds",
    "PipelineResult",
    "run_pipeline",
]
