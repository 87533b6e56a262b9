"""Helpers for parsing the numbers and dates published in repurchase disclosures."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from .logging import get_logger

__all__ = [
    "INVALID",
    "has_letter",
    "parse_decimal",
    "parse_optional_numeric",
    "extract_comment_if_non_numeric",
    "parse_lenient_decimal",
    "parse_iso_date",
]

logger = get_logger(__name__)

INVALID = Decimal("NaN")

_SPACE_PATTERN = re.compile(r"\s")
_DECIMAL_COMMA_PATTERN = re.compile(r",(\d{1,2})$")
_ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
_US_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?|[+-]?\.\d+")


def has_letter(text: Optional[str]) -> bool:
    """Return True when ``text`` contains at least one alphabetic character."""
    if not text:
        return False
    return any(char.isalpha() for char in text)


def _normalize(raw: str) -> str:
    value = _SPACE_PATTERN.sub("", raw.strip())
    if "." not in value:
        # "12,50" style decimal comma; any other comma groups thousands
        value = _DECIMAL_COMMA_PATTERN.sub(r".\1", value)
    return value.replace(",", "")


def parse_decimal(raw: Optional[str]) -> Decimal:
    """Parse a disclosure number such as ``'1 234,56'`` or ``'12,500'``.

    Failures are soft: the invalid sentinel ``Decimal('NaN')`` is returned
    and a warning is logged, so one bad cell never costs the rest of the row.
    """
    if raw is None:
        return INVALID

    normalized = _normalize(raw)
    if not normalized:
        logger.warning("parse_decimal_failed", value=raw, error="empty value")
        return INVALID
    try:
        number = Decimal(normalized)
    except InvalidOperation:
        logger.warning("parse_decimal_failed", value=raw, error="not a number")
        return INVALID
    if not number.is_finite():
        logger.warning("parse_decimal_failed", value=raw, error="not a finite number")
        return INVALID
    return number


def parse_optional_numeric(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a price cell; annotations such as footnote text yield ``None``."""
    if raw is None or not raw.strip():
        return None
    if has_letter(raw):
        return None
    return parse_decimal(raw)


def extract_comment_if_non_numeric(raw: Optional[str]) -> Optional[str]:
    """Return the cell text when it is an annotation rather than a number."""
    if raw is None or not raw.strip():
        return None
    if has_letter(raw):
        return raw.strip()
    return None


def parse_lenient_decimal(raw: Optional[str], default: Optional[Decimal]) -> Optional[Decimal]:
    """Parse a US formatted number, falling back to ``default``.

    Like a locale number parser, the longest valid leading number is used and
    trailing text is ignored (``'12.5 SEK'`` -> ``12.5``).
    """
    if raw is None:
        return default
    match = _US_NUMBER_PATTERN.match(raw.strip())
    if not match:
        logger.warning("parse_number_failed", value=raw)
        return default
    try:
        return Decimal(match.group(0).replace(",", ""))
    except InvalidOperation:  # pragma: no cover - regex guarantees a number
        logger.warning("parse_number_failed", value=raw)
        return default


def parse_iso_date(raw: Optional[str]) -> date:
    """Parse a strict ``YYYY-MM-DD`` date; anything else raises ``ValueError``."""
    if raw is None:
        raise ValueError("date is required")
    value = raw.strip()
    if not _ISO_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"unable to parse date from '{raw}'")
    return date.fromisoformat(value)
