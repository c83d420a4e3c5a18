"""
Header-driven column resolution.

Exported sheets rename, reorder and decorate their headers freely
("Stock Total", "STOCK DEP.", "stock"), so columns are located by
case-insensitive substring match instead of exact names. Resolution happens
once per sheet; the aggregation loops then work with plain integer offsets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .parsers import is_missing


def _header_text(cell: Any) -> str:
    return "" if is_missing(cell) else str(cell).strip().upper()


def find_column_index(header_row: Sequence[Any], candidates: Iterable[str]) -> int:
    """
    Return the position of the leftmost header containing any candidate, or -1.

    Matching is substring-based and case-insensitive, so ["Prov"] finds
    "PROVEEDOR". Candidate order never changes the winner: the leftmost
    matching column wins, whichever candidate it matched.
    """
    keys = [str(c).strip().upper() for c in candidates]
    for position, cell in enumerate(header_row):
        text = _header_text(cell)
        if any(key in text for key in keys):
            return position
    return -1


def resolve_offset_columns(
    header_row: Sequence[Any], max_days: int
) -> list[tuple[int, int]]:
    """
    Locate the daily history columns "-1" .. "-max_days".

    Returns (column position, day offset) pairs ordered by offset, most
    recent day first. Offsets without a column are simply absent.
    """
    found = []
    for day in range(1, max_days + 1):
        position = find_column_index(header_row, [f"-{day}"])
        if position > -1:
            found.append((position, day))
    return found


@dataclass(frozen=True)
class ColumnIndex:
    """
    Column positions for one sheet, resolved once from its header row.

    Usage:
        index = ColumnIndex.resolve(header, {"sku": ["SKU"], "stock": ["Stock"]})
        index.sku            # -> 0
        index.cell(row, "stock")
    """

    positions: dict[str, int] = field(default_factory=dict)

    @classmethod
    def resolve(
        cls, header_row: Sequence[Any], columns: dict[str, Sequence[str]]
    ) -> "ColumnIndex":
        return cls(
            {name: find_column_index(header_row, names) for name, names in columns.items()}
        )

    def __getattr__(self, name: str) -> int:
        # Only reached for names that are not real attributes
        positions = self.__dict__.get("positions", {})
        if name in positions:
            return positions[name]
        raise AttributeError(name)

    def __getitem__(self, name: str) -> int:
        return self.positions[name]

    def has(self, name: str) -> bool:
        return self.positions.get(name, -1) > -1

    def missing(self) -> list[str]:
        """Names of the columns that did not resolve, in declaration order."""
        return [name for name, pos in self.positions.items() if pos == -1]

    def cell(self, row: Sequence[Any], name: str) -> Any:
        """Raw cell for a named column, or None when unresolved or past row end."""
        position = self.positions.get(name, -1)
        if position < 0 or position >= len(row):
            return None
        return row[position]
