"""Data transfer objects for credit sale operations."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from uuid import UUID

CLIENT_NAME_MAX_LENGTH = 255


@dataclass(frozen=True)
class CreateCreditSaleRequest:
    """Input data for registering a credit sale."""

    client_name: str
    products: str
    subtotal_cents: int
    discount_cents: int
    number_of_installments: int
    first_due_date: date
    sale_date: Optional[date] = None
    client_id: Optional[int] = None

    @property
    def total_cents(self) -> int:
        return self.subtotal_cents - self.discount_cents

    def validate(self, max_installments: int) -> List[str]:
        errors = []

        if not self.client_name or not self.client_name.strip():
            errors.append("client_name is required")
        elif len(self.client_name.strip()) > CLIENT_NAME_MAX_LENGTH:
            errors.append(f"client_name must be at most {CLIENT_NAME_MAX_LENGTH} characters")

        if not self.products or not self.products.strip():
            errors.append("products is required")

        if self.number_of_installments < 1:
            errors.append("number_of_installments must be at least 1")
        elif self.number_of_installments > max_installments:
            errors.append(f"number_of_installments must be at most {max_installments}")

        if self.subtotal_cents < 0:
            errors.append("subtotal_cents cannot be negative")

        if self.discount_cents < 0:
            errors.append("discount_cents cannot be negative")
        elif self.discount_cents >= self.subtotal_cents:
            errors.append("discount_cents must be less than subtotal_cents")
        elif self.total_cents <= 0:
            errors.append("total amount must be positive")

        return errors


@dataclass(frozen=True)
class PayInstallmentRequest:
    """Input data for recording an installment payment."""

    installment_id: UUID
    payment_method: str
    paid_date: Optional[date] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.payment_method or not self.payment_method.strip():
            errors.append("payment_method is required")

        return errors


@dataclass(frozen=True)
class InstallmentDTO:
    """Single installment within a credit sale response."""

    installment_id: str
    installment_number: int
    amount_cents: int
    due_date: str
    status: str
    paid_date: Optional[str]
    payment_method: Optional[str]


@dataclass(frozen=True)
class CreditSaleResponse:
    """Response data for a credit sale with its installments."""

    credit_sale_id: str
    client_name: str
    client_id: Optional[int]
    products: str
    subtotal_cents: int
    discount_cents: int
    total_cents: int
    number_of_installments: int
    first_due_date: str
    sale_date: str
    status: str
    total_paid_cents: int
    remaining_cents: int
    paid_count: int
    next_due_date: Optional[str]
    installments: List[InstallmentDTO]

    @classmethod
    def from_entity(cls, sale) -> "CreditSaleResponse":
        installments = [
            InstallmentDTO(
                installment_id=str(inst.id),
                installment_number=inst.installment_number,
                amount_cents=inst.amount_cents,
                due_date=inst.due_date.isoformat(),
                status=inst.status.value,
                paid_date=inst.paid_date.isoformat() if inst.paid_date else None,
                payment_method=inst.payment_method,
            )
            for inst in sorted(sale.installments, key=lambda i: i.installment_number)
        ]
        next_due = sale.next_due_date

        return cls(
            credit_sale_id=str(sale.id),
            client_name=sale.client_name,
            client_id=sale.client_id,
            products=sale.products,
            subtotal_cents=sale.subtotal_cents,
            discount_cents=sale.discount_cents,
            total_cents=sale.total_cents,
            number_of_installments=sale.number_of_installments,
            first_due_date=sale.first_due_date.isoformat(),
            sale_date=sale.sale_date.isoformat(),
            status=sale.status.value,
            total_paid_cents=sale.total_paid_cents,
            remaining_cents=sale.remaining_cents,
            paid_count=sale.paid_count,
            next_due_date=next_due.isoformat() if next_due else None,
            installments=installments,
        )


@dataclass(frozen=True)
class CreditSaleTotals:
    """Totals over a listing of credit sales."""

    count: int
    overdue_count: int
    total_cents: int
    total_paid_cents: int
    remaining_cents: int


@dataclass(frozen=True)
class CreditSaleListResponse:
    """Listing of credit sales with aggregated totals."""

    sales: List[CreditSaleResponse]
    totals: CreditSaleTotals

    @classmethod
    def from_entities(cls, sales: list) -> "CreditSaleListResponse":
        ordered = sorted(sales, key=lambda s: (s.sale_date, s.created_at), reverse=True)
        responses = [CreditSaleResponse.from_entity(s) for s in ordered]

        totals = CreditSaleTotals(
            count=len(responses),
            overdue_count=sum(1 for r in responses if r.status == "overdue"),
            total_cents=sum(r.total_cents for r in responses),
            total_paid_cents=sum(r.total_paid_cents for r in responses),
            remaining_cents=sum(r.remaining_cents for r in responses),
        )
        return cls(sales=responses, totals=totals)


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of a batch status refresh."""

    today: str
    sales_scanned: int
    sales_updated: int
    installments_updated: int


@dataclass(frozen=True)
class PaymentReceipt:
    """Data printed on the receipt of a paid installment."""

    credit_sale_id: str
    installment_id: str
    client_name: str
    products: str
    installment_number: int
    number_of_installments: int
    amount_cents: int
    amount_display: str
    paid_date: str
    payment_method: str
    remaining_cents: int
    remaining_display: str
