"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database with the full schema
- Test client for the FastAPI app bound to that database
- A fixed "today" for every ledger operation
"""

from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.application.services import CreditSaleService, SaleLockRegistry
from src.core.dependencies import get_credit_sale_service, get_db_session
from src.infrastructure.database import Base
from src.infrastructure.database.models import ClientModel
from src.infrastructure.repositories import (
    PostgresClientRepository,
    PostgresCreditSaleRepository,
    PostgresRevenueRepository,
    PostgresSystemSettingsRepository,
)
from src.service.ledger import LedgerSettings


class Clock:
    """Settable stand-in for 'today in the shop's timezone'."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def registered_clients(test_session: AsyncSession) -> list[ClientModel]:
    """Clients already known to the shop; two of them share a name."""
    clients = [
        ClientModel(full_name="Joao Silva", whatsapp="11999990000"),
        ClientModel(full_name="Pedro Souza", whatsapp="11988887777"),
        ClientModel(full_name="Pedro Souza", whatsapp="11977776666"),
    ]
    test_session.add_all(clients)
    await test_session.commit()
    return clients


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest.fixture
def clock() -> Clock:
    return Clock(date(2024, 1, 15))


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    clock: Clock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client bound to the in-memory database.

    Every request shares the test session and commits on success, like
    the production session dependency. The credit sale service reads
    "today" from the ``clock`` fixture.
    """
    locks = SaleLockRegistry()

    async def override_get_db_session():
        try:
            yield test_session
            await test_session.commit()
        except Exception:
            await test_session.rollback()
            raise

    async def override_get_credit_sale_service():
        return CreditSaleService(
            credit_sale_repository=PostgresCreditSaleRepository(test_session),
            revenue_repository=PostgresRevenueRepository(test_session),
            client_repository=PostgresClientRepository(test_session),
            settings_repository=PostgresSystemSettingsRepository(test_session),
            settings=LedgerSettings(),
            clock=clock,
            locks=locks,
        )

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_credit_sale_service] = override_get_credit_sale_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def sale_request() -> dict:
    """Request body for a three-installment sale starting on Jan 31st."""
    return {
        "client_name": "Carlos Lima",
        "products": "Pomada modeladora, Shampoo",
        "subtotal_cents": 30000,
        "discount_cents": 0,
        "number_of_installments": 3,
        "first_due_date": "2024-01-31",
    }
