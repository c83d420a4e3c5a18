# Core reusable components for inventory workbook analytics
# Nothing here knows about a particular workbook's headers or sheet names

from .parsers import (
    clean_string,
    parse_number,
    format_money,
    excel_serial_to_date,
    date_to_excel_serial,
)
from .columns import ColumnIndex, find_column_index, resolve_offset_columns
from .quality import (
    SheetError,
    EmptySheetError,
    MissingColumnsError,
    SheetQualityReport,
    validate_sheet,
)
from .records import SkuRecord, FlatRow, records_frame
from .analysis import (
    linear_regression,
    standard_deviation,
    detect_anomaly,
    enrich_with_analytics,
    enrich_all,
)
from .classification import ClassificationResult, classify_abc_and_health
from .snapshot import InventorySnapshot, DashboardSummary

__all__ = [
    "clean_string",
    "parse_number",
    "format_money",
    "excel_serial_to_date",
    "date_to_excel_serial",
    "ColumnIndex",
    "find_column_index",
    "resolve_offset_columns",
    "SheetError",
    "EmptySheetError",
    "MissingColumnsError",
    "SheetQualityReport",
    "validate_sheet",
    "SkuRecord",
    "FlatRow",
    "records_frame",
    "linear_regression",
    "standard_deviation",
    "detect_anomaly",
    "enrich_with_analytics",
    "enrich_all",
    "ClassificationResult",
    "classify_abc_and_health",
    "InventorySnapshot",
    "DashboardSummary",
]
