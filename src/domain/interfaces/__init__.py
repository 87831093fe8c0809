"""
Domain Interfaces (Ports)
"""

from .repositories import (
    ClientRepository,
    CreditSaleRepository,
    RevenueRepository,
    SystemSettingsRepository,
)

__all__ = [
    "ClientRepository",
    "CreditSaleRepository",
    "RevenueRepository",
    "SystemSettingsRepository",
]
