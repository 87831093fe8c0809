"""
Credit Sale Aggregation.

Totals and the overall sale status are derived from the installment set
and must be recomputed after every installment mutation.
"""

from dataclasses import dataclass
from typing import Iterable

from src.domain.entities import (
    CreditSale,
    CreditSaleStatus,
    Installment,
    InstallmentStatus,
)


@dataclass(frozen=True)
class SaleAggregates:
    """Derived values of a credit sale."""

    total_paid_cents: int
    remaining_cents: int
    status: CreditSaleStatus


def recompute_sale_aggregates(
    total_cents: int,
    installments: Iterable[Installment],
) -> SaleAggregates:
    """
    Compute totalPaid, remaining and status from installments.

    Status precedence: all installments PAID gives PAID; otherwise any
    OVERDUE installment gives OVERDUE; otherwise ACTIVE. An empty
    installment set is ACTIVE with nothing paid.

    Remaining is clamped at zero, so a fully paid sale reports exactly 0.
    """
    installments = list(installments)

    total_paid = sum(
        inst.amount_cents
        for inst in installments
        if inst.status == InstallmentStatus.PAID
    )
    remaining = max(0, total_cents - total_paid)

    if installments and all(inst.status == InstallmentStatus.PAID for inst in installments):
        status = CreditSaleStatus.PAID
    elif any(inst.status == InstallmentStatus.OVERDUE for inst in installments):
        status = CreditSaleStatus.OVERDUE
    else:
        status = CreditSaleStatus.ACTIVE

    return SaleAggregates(
        total_paid_cents=total_paid,
        remaining_cents=remaining,
        status=status,
    )


def apply_sale_aggregates(sale: CreditSale) -> bool:
    """
    Recompute and store aggregates on the sale from its own installments.

    Returns:
        True if any derived field changed
    """
    aggregates = recompute_sale_aggregates(sale.total_cents, sale.installments)
    changed = (
        sale.total_paid_cents != aggregates.total_paid_cents
        or sale.remaining_cents != aggregates.remaining_cents
        or sale.status != aggregates.status
    )
    sale.total_paid_cents = aggregates.total_paid_cents
    sale.remaining_cents = aggregates.remaining_cents
    sale.status = aggregates.status
    return changed
