"""
Integration tests for data persistence.

These tests verify:
1. Credit sales and installments round-trip through the database
2. The paid transition is conditional (second attempt changes nothing)
3. A failing insert leaves neither the sale nor any installment behind
4. Client lookups, settings row and revenue range queries
5. Column widths hold the longest linked client name
"""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.exc import SQLAlchemyError

from src.domain.entities import (
    Client,
    CreditSale,
    CreditSaleStatus,
    Installment,
    InstallmentStatus,
    RevenueTransaction,
    SystemSettings,
)
from src.domain.exceptions import CreditSaleCreationFailedException, PersistenceException
from src.infrastructure.database.models import (
    CreditSaleModel,
    RevenueTransactionModel,
    SystemSettingsModel,
)
from src.infrastructure.repositories import (
    PostgresClientRepository,
    PostgresCreditSaleRepository,
    PostgresRevenueRepository,
    PostgresSystemSettingsRepository,
)
from src.infrastructure.repositories.errors import storage_errors


def make_sale(
    total_cents: int = 20000,
    installment_numbers: tuple = (1, 2),
    sale_date: date = date(2024, 1, 15),
) -> CreditSale:
    sale = CreditSale(
        client_name="Carlos Lima",
        products="Pomada",
        subtotal_cents=total_cents,
        discount_cents=0,
        total_cents=total_cents,
        number_of_installments=len(installment_numbers),
        first_due_date=date(2024, 2, 10),
        sale_date=sale_date,
        remaining_cents=total_cents,
    )
    share = total_cents // len(installment_numbers)
    for offset, number in enumerate(installment_numbers):
        sale.installments.append(
            Installment(
                credit_sale_id=sale.id,
                installment_number=number,
                amount_cents=share,
                due_date=date(2024, 2 + offset, 10),
            )
        )
    return sale


class TestCreditSaleRepository:
    """Tests for PostgresCreditSaleRepository against SQLite."""

    @pytest.mark.asyncio
    async def test_round_trip(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        sale = make_sale()

        await repo.add(sale)
        await test_session.commit()
        loaded = await repo.get_by_id(sale.id)

        assert loaded.id == sale.id
        assert loaded.total_cents == 20000
        assert loaded.status == CreditSaleStatus.ACTIVE
        assert [i.installment_number for i in loaded.installments] == [1, 2]
        assert loaded.installments[1].due_date == date(2024, 3, 10)

    @pytest.mark.asyncio
    async def test_get_by_installment_id(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        sale = make_sale()
        await repo.add(sale)

        owner = await repo.get_by_installment_id(sale.installments[1].id)

        assert owner.id == sale.id
        assert await repo.get_by_installment_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_mark_paid_is_conditional(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        sale = make_sale()
        await repo.add(sale)
        installment_id = sale.installments[0].id

        first = await repo.mark_installment_paid(installment_id, date(2024, 2, 1), "pix")
        second = await repo.mark_installment_paid(installment_id, date(2024, 2, 2), "cash")

        assert first is True
        assert second is False
        loaded = await repo.get_by_id(sale.id)
        paid = loaded.find_installment(installment_id)
        assert paid.status == InstallmentStatus.PAID
        assert paid.paid_date == date(2024, 2, 1)
        assert paid.payment_method == "pix"

    @pytest.mark.asyncio
    async def test_failed_insert_leaves_nothing(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        # Duplicate installment numbers break the per-sale unique constraint
        sale = make_sale(installment_numbers=(1, 1))

        with pytest.raises(CreditSaleCreationFailedException):
            await repo.add(sale)

        assert await repo.get_by_id(sale.id) is None
        assert await repo.list_all() == []

    @pytest.mark.asyncio
    async def test_save_status_refresh(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        sale = make_sale()
        await repo.add(sale)

        sale.installments[0].status = InstallmentStatus.OVERDUE
        sale.status = CreditSaleStatus.OVERDUE
        await repo.save_status_refresh(sale, [sale.installments[0]])
        loaded = await repo.get_by_id(sale.id)

        assert loaded.status == CreditSaleStatus.OVERDUE
        assert loaded.installments[0].status == InstallmentStatus.OVERDUE
        assert loaded.installments[1].status == InstallmentStatus.PENDING

    @pytest.mark.asyncio
    async def test_list_order_and_unpaid(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        older = make_sale(sale_date=date(2024, 1, 1))
        newer = make_sale(sale_date=date(2024, 1, 20))
        settled = make_sale(sale_date=date(2024, 1, 10))
        settled.status = CreditSaleStatus.PAID
        for sale in (older, newer, settled):
            await repo.add(sale)

        listed = await repo.list_all()
        unpaid = await repo.list_unpaid()

        assert [s.id for s in listed] == [newer.id, settled.id, older.id]
        assert {s.id for s in unpaid} == {older.id, newer.id}

    @pytest.mark.asyncio
    async def test_longest_linked_client_name_fits(self, test_session):
        repo = PostgresCreditSaleRepository(test_session)
        client = Client(id=1, full_name="x" * 255, whatsapp="9" * 20)
        sale = make_sale()
        sale.client_name = client.display_name

        await repo.add(sale)
        loaded = await repo.get_by_id(sale.id)

        width = CreditSaleModel.__table__.c.client_name.type.length
        assert len(client.display_name) <= width
        assert RevenueTransactionModel.__table__.c.client_name.type.length == width
        assert loaded.client_name == client.display_name


class TestOtherRepositories:
    """Tests for clients, settings and revenue storage."""

    @pytest.mark.asyncio
    async def test_find_client_by_name_ignores_case(self, test_session, registered_clients):
        repo = PostgresClientRepository(test_session)

        matches = await repo.find_by_full_name("  JOAO silva ")
        homonyms = await repo.find_by_full_name("Pedro Souza")

        assert [c.whatsapp for c in matches] == ["11999990000"]
        assert len(homonyms) == 2
        assert await repo.get_by_id(registered_clients[1].id) is not None
        assert await repo.get_by_id(9999) is None

    @pytest.mark.asyncio
    async def test_settings_row_is_upserted(self, test_session):
        repo = PostgresSystemSettingsRepository(test_session)

        assert await repo.get() is None

        await repo.save(SystemSettings(credit_sales_enabled=False))
        await repo.save(SystemSettings(credit_sales_enabled=True))

        stored = await repo.get()
        assert stored.credit_sales_enabled is True

    def test_switch_column_has_no_default(self):
        column = SystemSettingsModel.__table__.c.credit_sales_enabled

        assert column.default is None
        assert column.server_default is None

    @pytest.mark.asyncio
    async def test_revenue_range_is_inclusive(self, test_session):
        repo = PostgresRevenueRepository(test_session)
        for day in (1, 15, 31):
            await repo.add(
                RevenueTransaction(
                    client_name="Carlos Lima",
                    description=f"Fiado - Carlos Lima - Parcela {day}/31",
                    date=date(2024, 1, day),
                    payment_method="pix",
                    subtotal_cents=1000,
                    value_cents=1000,
                )
            )

        inside = await repo.list_between(date(2024, 1, 15), date(2024, 1, 31))

        assert [t.date.day for t in inside] == [15, 31]

    def test_storage_errors_become_persistence_exception(self):
        with pytest.raises(PersistenceException) as exc_info:
            with storage_errors("list_credit_sales"):
                raise SQLAlchemyError("connection refused")

        assert exc_info.value.operation == "list_credit_sales"
        assert exc_info.value.code == "PERSISTENCE_ERROR"
