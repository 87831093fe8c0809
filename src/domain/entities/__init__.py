"""Domain Entities - Core business objects."""

from .credit_sale import (
    CreditSale,
    CreditSaleStatus,
    Installment,
    InstallmentStatus,
)
from .client import Client
from .revenue import RevenueTransaction, RevenueType
from .system_settings import SystemSettings

__all__ = [
    "CreditSale",
    "CreditSaleStatus",
    "Installment",
    "InstallmentStatus",
    "Client",
    "RevenueTransaction",
    "RevenueType",
    "SystemSettings",
]
