"""Repository implementations."""

from .client_repository import PostgresClientRepository
from .credit_sale_repository import PostgresCreditSaleRepository
from .revenue_repository import PostgresRevenueRepository
from .settings_repository import PostgresSystemSettingsRepository

__all__ = [
    "PostgresClientRepository",
    "PostgresCreditSaleRepository",
    "PostgresRevenueRepository",
    "PostgresSystemSettingsRepository",
]
