"""Calendar-date helpers. No time-of-day ever enters a comparison."""

import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .settings import LedgerSettings, ledger_settings


def add_months(start: date, months: int) -> date:
    """
    Add calendar months, clamping the day to the target month's length.

    2024-01-31 + 1 month is 2024-02-29, not 2024-03-02.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def today_local(settings: LedgerSettings = ledger_settings) -> date:
    """Today's date in the shop's timezone."""
    return datetime.now(ZoneInfo(settings.timezone)).date()
