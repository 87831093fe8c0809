"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import (
    PostgresClientRepository,
    PostgresCreditSaleRepository,
    PostgresRevenueRepository,
    PostgresSystemSettingsRepository,
)
from src.application.services import (
    CreditSaleService,
    RevenueService,
    SystemSettingsService,
)
from src.service.ledger import LedgerSettings, get_ledger_settings


# Repository dependencies
async def get_credit_sale_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresCreditSaleRepository:
    """Get a CreditSaleRepository instance."""
    return PostgresCreditSaleRepository(session)


async def get_revenue_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresRevenueRepository:
    """Get a RevenueRepository instance."""
    return PostgresRevenueRepository(session)


async def get_client_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresClientRepository:
    """Get a ClientRepository instance."""
    return PostgresClientRepository(session)


async def get_settings_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresSystemSettingsRepository:
    """Get a SystemSettingsRepository instance."""
    return PostgresSystemSettingsRepository(session)


def get_ledger_config() -> LedgerSettings:
    """Get the ledger rule settings."""
    return get_ledger_settings()


# Service dependencies
async def get_credit_sale_service(
    sale_repo: Annotated[PostgresCreditSaleRepository, Depends(get_credit_sale_repository)],
    revenue_repo: Annotated[PostgresRevenueRepository, Depends(get_revenue_repository)],
    client_repo: Annotated[PostgresClientRepository, Depends(get_client_repository)],
    settings_repo: Annotated[PostgresSystemSettingsRepository, Depends(get_settings_repository)],
    ledger_config: Annotated[LedgerSettings, Depends(get_ledger_config)],
) -> CreditSaleService:
    """Get a CreditSaleService instance with all dependencies."""
    return CreditSaleService(
        credit_sale_repository=sale_repo,
        revenue_repository=revenue_repo,
        client_repository=client_repo,
        settings_repository=settings_repo,
        settings=ledger_config,
    )


async def get_settings_service(
    settings_repo: Annotated[PostgresSystemSettingsRepository, Depends(get_settings_repository)],
    ledger_config: Annotated[LedgerSettings, Depends(get_ledger_config)],
) -> SystemSettingsService:
    """Get a SystemSettingsService instance."""
    return SystemSettingsService(settings_repository=settings_repo, settings=ledger_config)


async def get_revenue_service(
    revenue_repo: Annotated[PostgresRevenueRepository, Depends(get_revenue_repository)],
) -> RevenueService:
    """Get a RevenueService instance."""
    return RevenueService(revenue_repository=revenue_repo)
