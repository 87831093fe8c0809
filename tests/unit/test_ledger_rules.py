"""
Unit Tests for the credit sale ledger rules.

These tests verify:
1. Installment status resolution against "today"
2. Sale aggregation (totals, remaining, status precedence)
3. Amount splitting and monthly due dates
4. Money conversion and formatting

Test Categories:
- TestResolveInstallmentStatus: resolver rules and integrity errors
- TestSaleAggregates: totals and status precedence
- TestSplitAmount / TestDueDates: schedule generation
- TestMoney: cents conversion
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from src.domain.entities import (
    CreditSale,
    CreditSaleStatus,
    Installment,
    InstallmentStatus,
)
from src.domain.exceptions import DataIntegrityException
from src.service.ledger import (
    LedgerSettings,
    add_months,
    apply_resolved_statuses,
    apply_sale_aggregates,
    build_due_dates,
    format_money,
    from_cents,
    recompute_sale_aggregates,
    resolve_installment_status,
    split_amount,
)


# =============================================================================
# Test Fixtures
# =============================================================================

TODAY = date(2025, 3, 15)


def make_installment(
    due_date: date,
    amount_cents: int = 1000,
    number: int = 1,
    status: InstallmentStatus = InstallmentStatus.PENDING,
    paid_date: date | None = None,
    payment_method: str | None = None,
) -> Installment:
    return Installment(
        credit_sale_id=uuid4(),
        installment_number=number,
        amount_cents=amount_cents,
        due_date=due_date,
        status=status,
        paid_date=paid_date,
        payment_method=payment_method,
    )


def paid(due_date: date, amount_cents: int = 1000, number: int = 1) -> Installment:
    return make_installment(
        due_date,
        amount_cents=amount_cents,
        number=number,
        status=InstallmentStatus.PAID,
        paid_date=due_date,
        payment_method="pix",
    )


# =============================================================================
# Status Resolution Tests
# =============================================================================

class TestResolveInstallmentStatus:
    """Tests for resolve_installment_status."""

    def test_due_in_future_is_pending(self):
        inst = make_installment(date(2025, 4, 1))
        assert resolve_installment_status(inst, TODAY) == InstallmentStatus.PENDING

    def test_due_today_is_not_overdue(self):
        inst = make_installment(TODAY)
        assert resolve_installment_status(inst, TODAY) == InstallmentStatus.PENDING

    def test_due_yesterday_is_overdue(self):
        inst = make_installment(date(2025, 3, 14))
        assert resolve_installment_status(inst, TODAY) == InstallmentStatus.OVERDUE

    def test_payment_record_wins_over_due_date(self):
        inst = make_installment(
            date(2025, 1, 1),
            paid_date=date(2025, 3, 1),
            payment_method="cash",
        )
        assert resolve_installment_status(inst, TODAY) == InstallmentStatus.PAID

    def test_overdue_returns_to_pending_when_today_moves_back(self):
        inst = make_installment(date(2025, 3, 14), status=InstallmentStatus.OVERDUE)
        assert resolve_installment_status(inst, date(2025, 3, 1)) == InstallmentStatus.PENDING

    def test_partial_payment_record_raises(self):
        inst = make_installment(date(2025, 4, 1), paid_date=date(2025, 3, 1))
        with pytest.raises(DataIntegrityException):
            resolve_installment_status(inst, TODAY)

    def test_method_without_date_raises(self):
        inst = make_installment(date(2025, 4, 1), payment_method="pix")
        with pytest.raises(DataIntegrityException):
            resolve_installment_status(inst, TODAY)

    def test_paid_status_without_record_raises(self):
        inst = make_installment(date(2025, 4, 1), status=InstallmentStatus.PAID)
        with pytest.raises(DataIntegrityException):
            resolve_installment_status(inst, TODAY)

    def test_apply_returns_only_changed(self):
        late = make_installment(date(2025, 3, 1), number=1)
        upcoming = make_installment(date(2025, 4, 1), number=2)
        done = paid(date(2025, 2, 1), number=3)

        changed = apply_resolved_statuses([late, upcoming, done], TODAY)

        assert changed == [late]
        assert late.status == InstallmentStatus.OVERDUE
        assert upcoming.status == InstallmentStatus.PENDING
        assert done.status == InstallmentStatus.PAID

    def test_apply_twice_changes_nothing(self):
        installments = [make_installment(date(2025, 3, 1)), make_installment(date(2025, 5, 1))]
        apply_resolved_statuses(installments, TODAY)

        assert apply_resolved_statuses(installments, TODAY) == []


# =============================================================================
# Aggregation Tests
# =============================================================================

class TestSaleAggregates:
    """Tests for recompute_sale_aggregates."""

    def test_nothing_paid(self):
        installments = [make_installment(date(2025, 4, 1), 5000, n) for n in (1, 2)]

        result = recompute_sale_aggregates(10000, installments)

        assert result.total_paid_cents == 0
        assert result.remaining_cents == 10000
        assert result.status == CreditSaleStatus.ACTIVE

    def test_partially_paid(self):
        installments = [
            paid(date(2025, 3, 1), 3333, 1),
            make_installment(date(2025, 4, 1), 3333, 2),
            make_installment(date(2025, 5, 1), 3334, 3),
        ]

        result = recompute_sale_aggregates(10000, installments)

        assert result.total_paid_cents == 3333
        assert result.remaining_cents == 6667
        assert result.status == CreditSaleStatus.ACTIVE

    def test_all_paid(self):
        installments = [paid(date(2025, 3, 1), 5000, 1), paid(date(2025, 4, 1), 5000, 2)]

        result = recompute_sale_aggregates(10000, installments)

        assert result.total_paid_cents == 10000
        assert result.remaining_cents == 0
        assert result.status == CreditSaleStatus.PAID

    def test_any_overdue_makes_sale_overdue(self):
        installments = [
            paid(date(2025, 2, 1), 5000, 1),
            make_installment(date(2025, 3, 1), 5000, 2, status=InstallmentStatus.OVERDUE),
        ]

        result = recompute_sale_aggregates(10000, installments)

        assert result.status == CreditSaleStatus.OVERDUE
        assert result.remaining_cents == 5000

    def test_remaining_never_negative(self):
        installments = [paid(date(2025, 3, 1), 12000, 1)]

        result = recompute_sale_aggregates(10000, installments)

        assert result.remaining_cents == 0

    def test_empty_installments_is_active(self):
        result = recompute_sale_aggregates(10000, [])

        assert result.status == CreditSaleStatus.ACTIVE
        assert result.total_paid_cents == 0
        assert result.remaining_cents == 10000

    def test_apply_reports_change(self):
        sale = CreditSale(
            client_name="Joao",
            products="Pomada",
            subtotal_cents=10000,
            discount_cents=0,
            total_cents=10000,
            number_of_installments=1,
            first_due_date=date(2025, 3, 1),
            sale_date=date(2025, 2, 1),
            remaining_cents=10000,
        )
        sale.installments.append(
            make_installment(date(2025, 3, 1), 10000, status=InstallmentStatus.OVERDUE)
        )

        assert apply_sale_aggregates(sale) is True
        assert sale.status == CreditSaleStatus.OVERDUE
        assert apply_sale_aggregates(sale) is False


# =============================================================================
# Schedule Tests
# =============================================================================

class TestSplitAmount:
    """Tests for split_amount."""

    def test_remainder_goes_to_last(self):
        assert split_amount(10000, 3) == [3333, 3333, 3334]

    def test_even_split(self):
        assert split_amount(9000, 3) == [3000, 3000, 3000]

    def test_single_installment(self):
        assert split_amount(4550, 1) == [4550]

    def test_more_installments_than_cents(self):
        amounts = split_amount(2, 3)
        assert amounts == [0, 0, 2]
        assert sum(amounts) == 2

    def test_sum_is_exact(self):
        for total in (1, 99, 10001, 123457):
            for n in (1, 2, 7, 24):
                assert sum(split_amount(total, n)) == total

    def test_zero_installments_raises(self):
        with pytest.raises(ValueError):
            split_amount(1000, 0)


class TestDueDates:
    """Tests for add_months and build_due_dates."""

    def test_add_months_keeps_day(self):
        assert add_months(date(2025, 1, 10), 1) == date(2025, 2, 10)

    def test_add_months_clamps_leap_february(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_add_months_clamps_common_february(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)

    def test_add_months_crosses_year(self):
        assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)

    def test_schedule_is_monthly(self):
        assert build_due_dates(date(2025, 1, 10), 3) == [
            date(2025, 1, 10),
            date(2025, 2, 10),
            date(2025, 3, 10),
        ]

    def test_schedule_returns_to_day_after_short_month(self):
        assert build_due_dates(date(2024, 1, 31), 3) == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]


# =============================================================================
# Money Tests
# =============================================================================

class TestMoney:
    """Tests for cents to reais conversion and display."""

    def test_from_cents(self):
        assert from_cents(3334) == Decimal("33.34")

    def test_format_money_brl(self):
        text = format_money(123456, LedgerSettings(currency="BRL", locale="pt_BR"))
        assert "R$" in text
        assert "1.234,56" in text
