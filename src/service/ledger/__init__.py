"""
Credit Sale Ledger rules - pure functions over credit sales and installments.
"""

from .settings import LedgerSettings, get_ledger_settings, ledger_settings
from .money import from_cents, format_money
from .dates import add_months, today_local
from .status import resolve_installment_status, apply_resolved_statuses
from .aggregates import SaleAggregates, recompute_sale_aggregates, apply_sale_aggregates
from .schedule import split_amount, build_due_dates

__all__ = [
    # Settings
    "LedgerSettings",
    "get_ledger_settings",
    "ledger_settings",
    # Money / dates
    "from_cents",
    "format_money",
    "add_months",
    "today_local",
    # Status
    "resolve_installment_status",
    "apply_resolved_statuses",
    # Aggregates
    "SaleAggregates",
    "recompute_sale_aggregates",
    "apply_sale_aggregates",
    # Schedule
    "split_amount",
    "build_due_dates",
]
