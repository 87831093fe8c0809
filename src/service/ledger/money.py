"""Money helpers. Amounts are carried as integer cents everywhere."""

from decimal import Decimal

from babel.numbers import format_currency

from .settings import LedgerSettings, ledger_settings

CENT = Decimal("0.01")


def from_cents(cents: int) -> Decimal:
    """Convert integer cents to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def format_money(cents: int, settings: LedgerSettings = ledger_settings) -> str:
    """Render cents for display, e.g. ``R$ 1.234,56`` for pt_BR/BRL."""
    return format_currency(
        from_cents(cents),
        settings.currency,
        locale=settings.locale,
    )
