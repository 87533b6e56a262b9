"""Extraction of repurchase transactions from the HTML table and the JSON API."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Iterator, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from .assembler import assemble, is_valid
from .columns import COMPANY, DATE, PRICE, QUANTITY, TYPE, VALUE, ColumnMapper
from .errors import DocumentShapeError
from .logging import get_logger
from .models import ExtractionResult, RowOutcome, Transaction
from .numeral import (
    extract_comment_if_non_numeric,
    parse_decimal,
    parse_iso_date,
    parse_lenient_decimal,
    parse_optional_numeric,
)
from .rows import RowKind, classify_row

logger = get_logger(__name__)

TABLE_ID = "resultReurchaseId"
ROW_CLASS_MARKER = "tableTr"

JSON_PATH = ("data", "transactionData", "rowsData")
JSON_FIELDS = ("company_name", "type", "date", "price", "quantity", "value")
ZERO = Decimal("0")


class Extractor(ABC):
    """Turns one fetched document into transactions, isolating per-row failures."""

    name: str = "extractor"

    @abstractmethod
    def extract(self, document: str) -> ExtractionResult:
        raise NotImplementedError

    def _skip(self, result: ExtractionResult, index: int, reason: str, **context: Any) -> None:
        logger.warning("row_skipped", source=self.name, index=index, reason=reason, **context)
        result.add(RowOutcome(index=index, reason=reason))


class HtmlTableExtractor(Extractor):
    """Reads the repurchase table rendered by the Nasdaq Nordic corporate actions page."""

    name = "html"

    def __init__(self, table_id: str = TABLE_ID, row_marker: str = ROW_CLASS_MARKER) -> None:
        self.table_id = table_id
        self.row_marker = row_marker

    def extract(self, document: str) -> ExtractionResult:
        soup = BeautifulSoup(document, "lxml")
        table = soup.find("table", id=self.table_id)
        if table is None:
            raise DocumentShapeError(f"Failed to find repurchase table '{self.table_id}'")

        result = ExtractionResult()
        mapper = ColumnMapper()
        header_captured = False

        for index, row in enumerate(self._iter_rows(table)):
            cells = [cell.get_text(" ", strip=True) for cell in row.find_all("td")]
            kind = classify_row(cells, header_captured, mapper.index_of(DATE))

            if kind is RowKind.HEADER:
                mapper.initialize(cells[:6])
                header_captured = True
                logger.debug("header_captured", columns=cells[:6])
            elif kind is RowKind.TRANSACTION:
                try:
                    outcome = self._extract_row(index, mapper, cells)
                except Exception as exc:
                    self._skip(result, index, str(exc), error_type=type(exc).__name__)
                    continue
                if outcome.transaction is None:
                    self._skip(result, index, outcome.reason or "incomplete transaction")
                else:
                    result.add(outcome)

        logger.info(
            "html_extracted",
            transactions=len(result.transactions),
            skipped=len(result.skipped),
        )
        return result

    def _iter_rows(self, table: Tag) -> Iterator[Tag]:
        for row in table.find_all("tr"):
            classes = row.get("class") or []
            if any(self.row_marker in css_class for css_class in classes):
                yield row

    @staticmethod
    def _extract_row(index: int, mapper: ColumnMapper, cells: Sequence[str]) -> RowOutcome:
        price_text = mapper.get_field(cells, PRICE)
        transaction = assemble(
            mapper.get_field(cells, COMPANY),
            mapper.get_field(cells, TYPE),
            parse_iso_date(mapper.get_field(cells, DATE)),
            parse_optional_numeric(price_text),
            parse_decimal(mapper.get_field(cells, QUANTITY)),
            parse_decimal(mapper.get_field(cells, VALUE)),
            extract_comment_if_non_numeric(price_text),
        )
        if not is_valid(transaction):
            return RowOutcome(index=index, reason="missing company, type or date")
        return RowOutcome(index=index, transaction=transaction)


class JsonYearExtractor(Extractor):
    """Reads one year of the repurchase API document.

    Layout: ``data.transactionData.rowsData.<date>.rows[]`` where every row
    carries the string fields in ``JSON_FIELDS``. Keys that are not on this
    path are ignored, as are nodes of an unexpected type.
    """

    name = "json"

    def extract(self, document: str) -> ExtractionResult:
        try:
            payload = json.loads(document)
        except json.JSONDecodeError as exc:
            raise DocumentShapeError(f"Repurchase document is not valid JSON: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise DocumentShapeError("Repurchase document must be a JSON object")

        result = ExtractionResult()
        for index, row in enumerate(self._iter_rows(payload)):
            if not isinstance(row, Mapping):
                self._skip(result, index, "row is not an object")
                continue
            try:
                transaction = self._build(row)
            except Exception as exc:
                self._skip(result, index, str(exc), error_type=type(exc).__name__)
                continue
            if not is_valid(transaction):
                self._skip(result, index, "missing company, type or date")
                continue
            result.add(RowOutcome(index=index, transaction=transaction))

        logger.info(
            "json_extracted",
            transactions=len(result.transactions),
            skipped=len(result.skipped),
        )
        return result

    @staticmethod
    def _iter_rows(payload: Mapping[str, Any]) -> Iterator[Any]:
        node: Any = payload
        for key in JSON_PATH:
            if not isinstance(node, Mapping):
                return
            node = node.get(key)
        if not isinstance(node, Mapping):
            return

        for day in node.values():
            if not isinstance(day, Mapping):
                continue
            rows = day.get("rows")
            if isinstance(rows, list):
                yield from rows

    @staticmethod
    def _build(row: Mapping[str, Any]) -> Optional[Transaction]:
        fields = {name: _as_text(row.get(name)) for name in JSON_FIELDS}
        return assemble(
            fields["company_name"],
            fields["type"],
            parse_iso_date(fields["date"]),
            parse_lenient_decimal(fields["price"], None),
            parse_lenient_decimal(fields["quantity"], ZERO),
            parse_lenient_decimal(fields["value"], ZERO),
            None,
        )


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def parse_html_transactions(html: str) -> List[Transaction]:
    return HtmlTableExtractor().extract(html).transactions


def parse_json_transactions(document: str) -> List[Transaction]:
    return JsonYearExtractor().extract(document).transactions
