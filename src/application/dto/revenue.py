"""Data transfer objects for revenue reporting."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class RevenueEntryDTO:
    """A single revenue transaction."""

    transaction_id: str
    date: str
    client_name: str
    description: str
    payment_method: str
    value_cents: int
    type: str


@dataclass(frozen=True)
class RevenueSummaryResponse:
    """Revenue recorded within a date range."""

    start: str
    end: str
    total_cents: int
    by_payment_method: Dict[str, int]
    entries: List[RevenueEntryDTO]

    @classmethod
    def from_entities(cls, start, end, transactions: list) -> "RevenueSummaryResponse":
        by_method: Dict[str, int] = {}
        for txn in transactions:
            by_method[txn.payment_method] = by_method.get(txn.payment_method, 0) + txn.value_cents

        entries = [
            RevenueEntryDTO(
                transaction_id=str(txn.id),
                date=txn.date.isoformat(),
                client_name=txn.client_name,
                description=txn.description,
                payment_method=txn.payment_method,
                value_cents=txn.value_cents,
                type=txn.type.value,
            )
            for txn in transactions
        ]

        return cls(
            start=start.isoformat(),
            end=end.isoformat(),
            total_cents=sum(txn.value_cents for txn in transactions),
            by_payment_method=by_method,
            entries=entries,
        )
