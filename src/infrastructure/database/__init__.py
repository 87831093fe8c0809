"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import (
    Base,
    ClientModel,
    CreditSaleModel,
    InstallmentModel,
    RevenueTransactionModel,
    SystemSettingsModel,
)

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "ClientModel",
    "CreditSaleModel",
    "InstallmentModel",
    "RevenueTransactionModel",
    "SystemSettingsModel",
]
