"""Revenue transaction entity recorded when money comes in."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class RevenueType(str, Enum):
    SERVICE = "service"
    PRODUCT = "product"


@dataclass
class RevenueTransaction:
    """
    A revenue entry in the shop's cash report.

    Installment payments are booked as product revenue on the date the
    money was received, not on the date of the credit sale.
    """

    client_name: str
    description: str
    date: date
    payment_method: str
    subtotal_cents: int
    value_cents: int
    discount_cents: int = 0
    type: RevenueType = RevenueType.PRODUCT
    client_id: Optional[int] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
