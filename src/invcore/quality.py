"""
Sheet validation and data quality reporting.

Two kinds of problems come out of an uploaded sheet:
- Fatal ones (empty sheet, required columns missing) raise a SheetError
  and abort the whole consolidation.
- Soft ones (optional columns missing, numeric cells that parse to 0) are
  collected in a SheetQualityReport and logged, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from .columns import ColumnIndex, find_column_index

logger = logging.getLogger(__name__)


class SheetError(ValueError):
    """A sheet that cannot be processed at all."""


class EmptySheetError(SheetError):
    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Sheet '{sheet_name}' is empty or has no data rows")


class MissingColumnsError(SheetError):
    """Raised with every unresolved required column, not just the first."""

    def __init__(self, sheet_name: str, missing: list[str]):
        self.sheet_name = sheet_name
        self.missing = missing
        super().__init__(
            f"Sheet '{sheet_name}' is missing required columns: {', '.join(missing)}"
        )


def validate_sheet(
    header_row: Sequence[Any], required: Sequence[str], sheet_name: str = "Grafana"
) -> None:
    """Raise MissingColumnsError unless every required column resolves."""
    missing = [col for col in required if find_column_index(header_row, [col]) == -1]
    if missing:
        raise MissingColumnsError(sheet_name, missing)


@dataclass
class SheetIssue:
    """A single soft problem found in a sheet."""

    column: str
    issue_type: str  # "missing_column", "unparsed_number"
    severity: str  # "warning", "info"
    count: int = 0
    sample_values: list[Any] = field(default_factory=list)
    description: str = ""


@dataclass
class SheetQualityReport:
    """Soft degradations found while reading a single sheet."""

    sheet_name: str
    total_rows: int = 0
    issues: list[SheetIssue] = field(default_factory=list)

    @property
    def warning_issues(self) -> list[SheetIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def missing_columns(self) -> list[str]:
        return [i.column for i in self.issues if i.issue_type == "missing_column"]

    def record_missing_columns(self, index: ColumnIndex) -> "SheetQualityReport":
        """Add an info issue for each optional column that did not resolve."""
        for name in index.missing():
            self.issues.append(
                SheetIssue(
                    column=name,
                    issue_type="missing_column",
                    severity="info",
                    description=f"Column '{name}' not found; using defaults",
                )
            )
        return self

    def record_unparsed(self, column: str, raw: Any) -> None:
        """Count a non-empty cell in a numeric column that parsed to 0."""
        for issue in self.issues:
            if issue.column == column and issue.issue_type == "unparsed_number":
                issue.count += 1
                if len(issue.sample_values) < 5:
                    issue.sample_values.append(raw)
                issue.description = f"{issue.count:,} values couldn't be parsed"
                return
        self.issues.append(
            SheetIssue(
                column=column,
                issue_type="unparsed_number",
                severity="warning",
                count=1,
                sample_values=[raw],
                description="1 values couldn't be parsed",
            )
        )

    def log(self) -> None:
        if self.missing_columns:
            logger.info(
                "%s: optional columns not found: %s",
                self.sheet_name,
                ", ".join(self.missing_columns),
            )
        for issue in self.warning_issues:
            logger.warning("%s: column '%s': %s", self.sheet_name, issue.column, issue.description)

    def summary(self) -> dict:
        """Return a summary dict for display."""
        return {
            "sheet": self.sheet_name,
            "total_rows": self.total_rows,
            "missing_columns": len(self.missing_columns),
            "warnings": len(self.warning_issues),
        }
