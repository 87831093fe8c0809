"""Application services (use cases)."""

from .credit_sale_service import CreditSaleService
from .locks import SaleLockRegistry, sale_locks
from .revenue_service import RevenueService
from .settings_service import SystemSettingsService

__all__ = [
    "CreditSaleService",
    "RevenueService",
    "SaleLockRegistry",
    "SystemSettingsService",
    "sale_locks",
]
