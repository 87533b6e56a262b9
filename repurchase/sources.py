"""Source configurations: how a date range becomes requests, documents and records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Protocol, Sequence

from .logging import get_logger
from .models import Transaction
from .parser import Extractor, HtmlTableExtractor, JsonYearExtractor
from .time_utils import within, years_spanned

logger = get_logger(__name__)


class Fetcher(Protocol):
    def fetch_table(self, start: date, end: date) -> str: ...

    def fetch_year(self, year: int) -> str: ...


class RepurchaseSource(ABC):
    name: str
    extractor: Extractor

    @abstractmethod
    def plan(self, start: date, end: date) -> Sequence[object]:
        """Request units needed to cover the inclusive range."""

    @abstractmethod
    def fetch(self, fetcher: Fetcher, unit: object, start: date, end: date) -> str:
        ...

    def finalize(self, transactions: List[Transaction], start: date, end: date) -> List[Transaction]:
        return transactions


class HtmlTableSource(RepurchaseSource):
    """The corporate actions page: one request, rows kept in discovery order."""

    name = "html"

    def __init__(self) -> None:
        self.extractor = HtmlTableExtractor()

    def plan(self, start: date, end: date) -> Sequence[object]:
        return [(start, end)]

    def fetch(self, fetcher: Fetcher, unit: object, start: date, end: date) -> str:
        return fetcher.fetch_table(start, end)


class JsonYearSource(RepurchaseSource):
    """The API partitioned by calendar year.

    Years are pooled, trimmed to the requested window and ordered newest
    first, then by company and type.
    """

    name = "json"

    def __init__(self) -> None:
        self.extractor = JsonYearExtractor()

    def plan(self, start: date, end: date) -> Sequence[object]:
        return years_spanned(start, end)

    def fetch(self, fetcher: Fetcher, unit: object, start: date, end: date) -> str:
        return fetcher.fetch_year(int(unit))

    def finalize(self, transactions: List[Transaction], start: date, end: date) -> List[Transaction]:
        kept = [t for t in transactions if within(t.date, start, end)]
        dropped = len(transactions) - len(kept)
        if dropped:
            logger.debug("outside_window_dropped", count=dropped, start=str(start), end=str(end))
        return sorted(kept, key=Transaction.sort_key_desc)


_SOURCES: Dict[str, type[RepurchaseSource]] = {
    HtmlTableSource.name: HtmlTableSource,
    JsonYearSource.name: JsonYearSource,
}


def get_source(name: str) -> RepurchaseSource:
    try:
        return _SOURCES[name.lower()]()
    except KeyError as exc:
        raise ValueError(f"Unknown repurchase source '{name}'") from exc
