"""Core package for the share repurchase disclosure client."""

from .client import Repurchase
from .errors import DocumentShapeError, FetchError, InvalidDateRangeError, RepurchaseError
from .models import ExtractionResult, RowOutcome, Transaction

__all__ = [
    "Repurchase",
    "Transaction",
    "RowOutcome",
    "ExtractionResult",
    "RepurchaseError",
    "InvalidDateRangeError",
    "FetchError",
    "DocumentShapeError",
]
