"""
Installment Status Resolution.

The status of an installment is a pure function of its payment record and
its due date relative to "today". The same function serves both the
on-read view and the batch refresh, so the two never disagree.
"""

from datetime import date
from typing import Iterable, List

from src.domain.entities import Installment, InstallmentStatus
from src.domain.exceptions import DataIntegrityException


def resolve_installment_status(installment: Installment, today: date) -> InstallmentStatus:
    """
    Derive an installment's status.

    Rules:
        1. A payment record (paid_date and payment_method) means PAID,
           regardless of the due date.
        2. Otherwise, a due date strictly before today means OVERDUE.
        3. Otherwise PENDING. An installment due today is not yet late.

    Args:
        installment: The installment to evaluate
        today: Calendar date to compare against (shop-local)

    Returns:
        The resolved InstallmentStatus

    Raises:
        DataIntegrityException: If the payment record is half-filled, or a
            stored PAID status has no payment record behind it
    """
    has_date = installment.paid_date is not None
    has_method = bool(installment.payment_method)

    if has_date != has_method:
        raise DataIntegrityException(
            f"Installment {installment.id} has a partial payment record "
            f"(paid_date={installment.paid_date}, "
            f"payment_method={installment.payment_method!r})"
        )

    if has_date:
        return InstallmentStatus.PAID

    if installment.status == InstallmentStatus.PAID:
        raise DataIntegrityException(
            f"Installment {installment.id} is marked paid without a payment record"
        )

    if installment.due_date < today:
        return InstallmentStatus.OVERDUE

    return InstallmentStatus.PENDING


def apply_resolved_statuses(installments: Iterable[Installment], today: date) -> List[Installment]:
    """
    Re-resolve every installment in place.

    Returns:
        The installments whose status changed
    """
    changed = []
    for installment in installments:
        resolved = resolve_installment_status(installment, today)
        if resolved != installment.status:
            installment.status = resolved
            changed.append(installment)
    return changed
