"""Build validated transactions from parsed field values."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from .models import Transaction

__all__ = ["assemble", "is_valid"]


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None


def assemble(
    company: Optional[str],
    type_: Optional[str],
    date_: Optional[date],
    price: Optional[Decimal],
    quantity: Decimal,
    value: Decimal,
    comment: Optional[str] = None,
) -> Optional[Transaction]:
    """Return a Transaction, or None when company, type or date is missing.

    Price, quantity, value and comment never decide validity.
    """
    company = _clean(company)
    type_ = _clean(type_)
    if company is None or type_ is None or date_ is None:
        return None
    return Transaction(
        company=company,
        type=type_,
        date=date_,
        price=price,
        quantity=quantity,
        value=value,
        comment=comment,
    )


def is_valid(transaction: Optional[Transaction]) -> bool:
    return (
        transaction is not None
        and bool(transaction.company)
        and bool(transaction.type)
        and transaction.date is not None
    )
