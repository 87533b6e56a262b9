"""Domain models for repurchase transactions and extraction results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional


def _amount_key(amount: Optional[Decimal]) -> object:
    # Decimal NaN never equals itself; invalid amounts compare equal here
    if amount is not None and amount.is_nan():
        return "NaN"
    return amount


@dataclass(frozen=True, slots=True, eq=False)
class Transaction:
    """Single disclosed repurchase of a company's own shares.

    Equality and hashing cover every field, with the invalid-amount
    sentinel ``Decimal('NaN')`` treated as equal to itself.
    """

    company: str
    type: str
    date: date
    price: Optional[Decimal]
    quantity: Decimal
    value: Decimal
    comment: Optional[str] = None

    def _identity(self) -> tuple:
        return (
            self.company,
            self.type,
            self.date,
            _amount_key(self.price),
            _amount_key(self.quantity),
            _amount_key(self.value),
            self.comment,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __lt__(self, other: "Transaction") -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.date < other.date

    def sort_key_desc(self) -> tuple:
        """Key for newest-first ordering, ties broken by company then type."""
        return (-self.date.toordinal(), self.company, self.type)


@dataclass(slots=True)
class RowOutcome:
    """What happened to one source row: a transaction or the reason it was skipped."""

    index: int
    transaction: Optional[Transaction] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.transaction is not None


@dataclass(slots=True)
class ExtractionResult:
    transactions: List[Transaction] = field(default_factory=list)
    skipped: List[RowOutcome] = field(default_factory=list)

    def add(self, outcome: RowOutcome) -> None:
        if outcome.ok:
            self.transactions.append(outcome.transaction)
        else:
            self.skipped.append(outcome)

    def merge(self, other: "ExtractionResult") -> None:
        self.transactions.extend(other.transactions)
        self.skipped.extend(other.skipped)
