"""Credit sale ("fiado") domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class CreditSaleStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"
    OVERDUE = "overdue"


@dataclass
class Installment:
    """A single scheduled payment of a credit sale."""

    credit_sale_id: UUID
    installment_number: int
    amount_cents: int
    due_date: date
    id: UUID = field(default_factory=uuid4)
    status: InstallmentStatus = InstallmentStatus.PENDING
    paid_date: Optional[date] = None
    payment_method: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_paid(self) -> bool:
        return self.status == InstallmentStatus.PAID


@dataclass
class CreditSale:
    """
    A sale paid in installments over time.

    ``status``, ``total_paid_cents`` and ``remaining_cents`` are derived
    from the installments and are only ever written by the aggregator.
    """

    client_name: str
    products: str
    subtotal_cents: int
    discount_cents: int
    total_cents: int
    number_of_installments: int
    first_due_date: date
    sale_date: date
    id: UUID = field(default_factory=uuid4)
    client_id: Optional[int] = None
    status: CreditSaleStatus = CreditSaleStatus.ACTIVE
    total_paid_cents: int = 0
    remaining_cents: int = 0
    installments: List[Installment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def paid_count(self) -> int:
        return sum(1 for inst in self.installments if inst.is_paid)

    @property
    def next_due_date(self) -> Optional[date]:
        """Earliest due date among installments still open."""
        open_dates = [inst.due_date for inst in self.installments if not inst.is_paid]
        return min(open_dates) if open_dates else None

    def find_installment(self, installment_id: UUID) -> Optional[Installment]:
        for inst in self.installments:
            if inst.id == installment_id:
                return inst
        return None
