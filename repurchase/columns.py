"""Header-driven lookup of repurchase table columns."""

from __future__ import annotations

from typing import Dict, Optional, Sequence

COMPANY = "Company"
TYPE = "Type"
DATE = "Date"
PRICE = "Price"
QUANTITY = "Quantity"
VALUE = "Value"

COLUMN_NAMES = (COMPANY, TYPE, DATE, PRICE, QUANTITY, VALUE)
_KNOWN = {name.casefold() for name in COLUMN_NAMES}


class ColumnMapper:
    """Maps logical column names to cell positions for one parsed document.

    Source tables do not keep a stable column order, so fields are always
    read by name once a header row has been seen.
    """

    def __init__(self) -> None:
        self._index: Dict[str, int] = {}

    @property
    def is_initialized(self) -> bool:
        return bool(self._index)

    def initialize(self, header_cells: Sequence[str]) -> None:
        self._index = {}
        for position, text in enumerate(header_cells):
            name = (text or "").strip().casefold()
            if name:
                self._index[name] = position

    @staticmethod
    def is_header_row(first_cell_text: Optional[str]) -> bool:
        if first_cell_text is None:
            return False
        return first_cell_text.strip().casefold() in _KNOWN

    def index_of(self, column: str) -> Optional[int]:
        return self._index.get(column.casefold())

    def get_field(self, row: Sequence[str], column: str) -> Optional[str]:
        """Return the trimmed cell text for ``column`` or None if it is unmapped."""
        position = self.index_of(column)
        if position is None or position >= len(row):
            return None
        cell = row[position]
        return cell.strip() if cell is not None else None
