"""Exceptions raised by the repurchase client."""

from __future__ import annotations


class RepurchaseError(Exception):
    """Base class for all failures reported to the caller."""


class InvalidDateRangeError(RepurchaseError, ValueError):
    """Start date lies after the end date."""


class FetchError(RepurchaseError):
    """The upstream endpoint could not be reached or answered with an error status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DocumentShapeError(RepurchaseError):
    """The fetched document no longer has the expected table or node layout."""
