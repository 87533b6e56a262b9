"""Date helpers for repurchase request windows."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

__all__ = ["today", "trailing_window", "years_spanned", "within"]


def today(tz: Optional[ZoneInfo] = None) -> date:
    return datetime.now(tz).date()


def trailing_window(days_back: int, end: date) -> tuple[date, date]:
    """Return the inclusive (start, end) window reaching ``days_back`` days into the past."""
    if days_back < 0:
        raise ValueError("days_back must not be negative")
    return end - timedelta(days=days_back), end


def years_spanned(start: date, end: date) -> List[int]:
    """Calendar years touched by the inclusive range, oldest first."""
    return list(range(start.year, end.year + 1))


def within(value: date, start: date, end: date) -> bool:
    return start <= value <= end
