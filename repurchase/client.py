"""Public entry point for retrieving repurchase transactions."""

from __future__ import annotations

from datetime import date
from typing import Iterator, Optional, Union

from .config import AppConfig
from .errors import InvalidDateRangeError
from .logging import get_logger
from .models import ExtractionResult, Transaction
from .sources import Fetcher, RepurchaseSource, get_source
from .time_utils import today, trailing_window

logger = get_logger(__name__)

DEFAULT_DAYS_BACK = 30


class Repurchase:
    """Retrieves share repurchase disclosures for a date range."""

    def __init__(
        self,
        fetcher: Fetcher,
        source: Union[str, RepurchaseSource] = "json",
        config: Optional[AppConfig] = None,
    ) -> None:
        self.fetcher = fetcher
        self.source = get_source(source) if isinstance(source, str) else source
        self.config = config
        self.default_days_back = config.default_days_back if config else DEFAULT_DAYS_BACK

    def get_transactions(
        self,
        start_date: Union[date, int, None] = None,
        end_date: Optional[date] = None,
        days_back: Optional[int] = None,
    ) -> Iterator[Transaction]:
        """Return a one-shot iterator over transactions in the inclusive range.

        Called without arguments the last ``default_days_back`` days are used;
        an integer (positional or ``days_back``) selects that many days back
        from today. A start date after the end date raises
        InvalidDateRangeError before any request is sent.
        """
        if isinstance(start_date, int) and not isinstance(start_date, bool):
            days_back, start_date = start_date, None
        start, end = self._resolve_window(start_date, end_date, days_back)
        return iter(self.extract(start, end).transactions)

    def extract(self, start: date, end: date) -> ExtractionResult:
        """Fetch and parse ``start``..``end``, keeping the skipped rows for inspection.

        A fetcher may raise InterruptedError to abandon the call; the result is
        then empty. RepurchaseFetcher never does so (httpx reports transport
        failures as FetchError), the hook exists for custom fetchers.
        """
        if start > end:
            raise InvalidDateRangeError("Bad argument. Start date after end date")

        result = ExtractionResult()
        if start > self._today():
            logger.info("start_in_future", start=str(start))
            return result

        source = self.source
        try:
            for unit in source.plan(start, end):
                document = source.fetch(self.fetcher, unit, start, end)
                result.merge(source.extractor.extract(document))
        except InterruptedError:
            logger.warning("fetch_interrupted", source=source.name, start=str(start), end=str(end))
            return ExtractionResult()

        result.transactions = source.finalize(result.transactions, start, end)
        logger.info(
            "transactions_extracted",
            source=source.name,
            start=str(start),
            end=str(end),
            count=len(result.transactions),
            skipped=len(result.skipped),
        )
        return result

    def _resolve_window(
        self,
        start: Optional[date],
        end: Optional[date],
        days_back: Optional[int],
    ) -> tuple[date, date]:
        if start is not None and end is not None:
            return start, end
        if start is not None:
            # open-ended: a future start stays a valid, empty window
            return start, max(start, self._today())
        end = end or self._today()
        return trailing_window(self.default_days_back if days_back is None else days_back, end)

    def _today(self) -> date:
        return today(self.config.timezone if self.config else None)
