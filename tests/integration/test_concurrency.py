"""
Integration tests for concurrent writers on one credit sale.

Each payment runs in its own database session, the way two HTTP requests
do. The request that finishes first holds its session open for a while
after the service returns; the second payment must still see the first
one when it recomputes the sale totals.
"""

import asyncio
from datetime import date
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.dto import CreateCreditSaleRequest, PayInstallmentRequest
from src.application.services import CreditSaleService, SaleLockRegistry
from src.domain.entities import CreditSaleStatus, InstallmentStatus
from src.infrastructure.database import Base
from src.infrastructure.repositories import (
    PostgresClientRepository,
    PostgresCreditSaleRepository,
    PostgresRevenueRepository,
    PostgresSystemSettingsRepository,
)
from src.service.ledger import LedgerSettings


TODAY = date(2024, 1, 15)


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """SQLite engine on a file so each session gets its own connection."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(file_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=file_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def locks() -> SaleLockRegistry:
    return SaleLockRegistry()


def build_service(session: AsyncSession, locks: SaleLockRegistry) -> CreditSaleService:
    return CreditSaleService(
        credit_sale_repository=PostgresCreditSaleRepository(session),
        revenue_repository=PostgresRevenueRepository(session),
        client_repository=PostgresClientRepository(session),
        settings_repository=PostgresSystemSettingsRepository(session),
        settings=LedgerSettings(),
        clock=lambda: TODAY,
        locks=locks,
    )


async def run_request(session_factory, locks, call, teardown_delay: float = 0.0):
    """
    Run one service call in its own session, then commit like the
    request-scoped session dependency does at teardown.
    """
    async with session_factory() as session:
        try:
            result = await call(build_service(session, locks))
            await asyncio.sleep(teardown_delay)
            await session.commit()
            return result
        except Exception:
            await session.rollback()
            raise


@pytest_asyncio.fixture
async def stored_sale(session_factory, locks):
    """A three-installment sale of R$ 300,00 committed before the test."""
    return await run_request(
        session_factory,
        locks,
        lambda service: service.create_credit_sale(
            CreateCreditSaleRequest(
                client_name="Carlos Lima",
                products="Pomada modeladora",
                subtotal_cents=30000,
                discount_cents=0,
                number_of_installments=3,
                first_due_date=date(2024, 1, 31),
            )
        ),
    )


def pay(installment_id: str, method: str):
    return lambda service: service.pay_installment(
        PayInstallmentRequest(installment_id=UUID(installment_id), payment_method=method)
    )


class TestConcurrentPaymentsAcrossSessions:
    """Payments on the same sale from separate sessions."""

    @pytest.mark.asyncio
    async def test_second_payment_sees_first_before_its_teardown(
        self, session_factory, locks, stored_sale
    ):
        first, second, _ = stored_sale.installments

        await asyncio.gather(
            run_request(session_factory, locks, pay(first.installment_id, "pix"), teardown_delay=0.2),
            run_request(session_factory, locks, pay(second.installment_id, "cash")),
        )

        async with session_factory() as session:
            sale = await PostgresCreditSaleRepository(session).get_by_id(
                UUID(stored_sale.credit_sale_id)
            )
            revenue = await PostgresRevenueRepository(session).list_between(TODAY, TODAY)

        paid = [i for i in sale.installments if i.status == InstallmentStatus.PAID]
        assert len(paid) == 2
        assert sale.total_paid_cents == 20000
        assert sale.remaining_cents == 10000
        assert sale.status == CreditSaleStatus.ACTIVE
        assert len(revenue) == 2
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_all_installments_paid_concurrently_settle_the_sale(
        self, session_factory, locks, stored_sale
    ):
        await asyncio.gather(*[
            run_request(
                session_factory,
                locks,
                pay(inst.installment_id, "pix"),
                teardown_delay=0.05 * inst.installment_number,
            )
            for inst in stored_sale.installments
        ])

        async with session_factory() as session:
            sale = await PostgresCreditSaleRepository(session).get_by_id(
                UUID(stored_sale.credit_sale_id)
            )

        assert sale.status == CreditSaleStatus.PAID
        assert sale.total_paid_cents == 30000
        assert sale.remaining_cents == 0
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_refresh_and_payment_from_separate_sessions(
        self, session_factory, locks, stored_sale
    ):
        first = stored_sale.installments[0]

        await asyncio.gather(
            run_request(
                session_factory,
                locks,
                lambda service: service.refresh_all_statuses(today=date(2024, 2, 5)),
                teardown_delay=0.1,
            ),
            run_request(session_factory, locks, pay(first.installment_id, "pix")),
        )

        async with session_factory() as session:
            sale = await PostgresCreditSaleRepository(session).get_by_id(
                UUID(stored_sale.credit_sale_id)
            )

        assert sale.total_paid_cents == 10000
        assert sale.remaining_cents == 20000
        assert len(locks) == 0
