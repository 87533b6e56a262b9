"""Classification of raw table rows before any column mapping exists."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .columns import ColumnMapper

MIN_CELLS = 6
DATE_CELL = 2


class RowKind(str, Enum):
    INVALID = "invalid"
    HEADER = "header"
    TRANSACTION = "transaction"
    NOISE = "noise"


def is_invalid_row(cells: Sequence[str] | None) -> bool:
    return cells is None or len(cells) < MIN_CELLS


def looks_like_date(text: str | None) -> bool:
    """Shape check for ``NNNN-NN-NN``; real validation happens when parsing."""
    if text is None:
        return False
    text = text.strip()
    return len(text) == 10 and text[4] == "-" and text[7] == "-"


def classify_row(
    cells: Sequence[str] | None,
    header_captured: bool,
    date_index: int | None = None,
) -> RowKind:
    """Decide how a raw row is treated.

    ``date_index`` is the Date column resolved from the header; until a header
    is seen the fixed third cell is inspected.
    """
    if is_invalid_row(cells):
        return RowKind.INVALID
    if not header_captured and ColumnMapper.is_header_row(cells[0]):
        return RowKind.HEADER
    # once a header is captured, header-like rows with a date are data
    position = DATE_CELL if date_index is None else date_index
    if position < len(cells) and looks_like_date(cells[position]):
        return RowKind.TRANSACTION
    return RowKind.NOISE
