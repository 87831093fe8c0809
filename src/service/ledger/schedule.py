"""Installment schedule generation for credit sales."""

from datetime import date
from typing import List

from .dates import add_months


def split_amount(total_cents: int, num_installments: int) -> List[int]:
    """
    Split a total into equal installments.

    Every part is the floor of the even share; the last installment absorbs
    the remainder so the parts sum exactly to the total.

    Example:
        100.00 in 3 -> [33.33, 33.33, 33.34]
        10000 cents // 3 = 3333 base, remainder 1 on the last
    """
    if num_installments < 1:
        raise ValueError("num_installments must be at least 1")
    if total_cents < 0:
        raise ValueError("total_cents cannot be negative")

    base_amount = total_cents // num_installments
    remainder = total_cents - base_amount * num_installments

    amounts = [base_amount] * num_installments
    amounts[-1] += remainder
    return amounts


def build_due_dates(first_due_date: date, num_installments: int) -> List[date]:
    """
    Monthly due dates starting at first_due_date.

    Each date is computed from the first one, not chained from the
    previous, so a sale starting on the 31st returns to the 31st in long
    months after passing through a short one.
    """
    return [add_months(first_due_date, k) for k in range(num_installments)]
