"""PostgreSQL repository implementation for credit sales."""

from datetime import date
from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.entities import (
    CreditSale,
    CreditSaleStatus,
    Installment,
    InstallmentStatus,
)
from src.domain.exceptions import CreditSaleCreationFailedException
from src.domain.interfaces import CreditSaleRepository
from src.infrastructure.database.models import CreditSaleModel, InstallmentModel

from .errors import storage_errors

logger = structlog.get_logger(__name__)


class PostgresCreditSaleRepository(CreditSaleRepository):
    """PostgreSQL-backed credit sale repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, sale: CreditSale) -> CreditSale:
        model = CreditSaleModel(
            id=str(sale.id),
            client_id=sale.client_id,
            client_name=sale.client_name,
            products=sale.products,
            subtotal_cents=sale.subtotal_cents,
            discount_cents=sale.discount_cents,
            total_cents=sale.total_cents,
            number_of_installments=sale.number_of_installments,
            first_due_date=sale.first_due_date,
            sale_date=sale.sale_date,
            status=sale.status.value,
            total_paid_cents=sale.total_paid_cents,
            remaining_cents=sale.remaining_cents,
            created_at=sale.created_at,
        )

        for installment in sale.installments:
            model.installments.append(
                InstallmentModel(
                    id=str(installment.id),
                    credit_sale_id=str(sale.id),
                    installment_number=installment.installment_number,
                    amount_cents=installment.amount_cents,
                    due_date=installment.due_date,
                    status=installment.status.value,
                    paid_date=installment.paid_date,
                    payment_method=installment.payment_method,
                    created_at=installment.created_at,
                )
            )

        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            # Drop the sale row together with any installment already flushed
            await self._session.rollback()
            logger.error(
                "credit_sale_insert_failed",
                credit_sale_id=str(sale.id),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise CreditSaleCreationFailedException(type(exc).__name__) from exc

        return sale

    async def get_by_id(
        self,
        sale_id: UUID,
        for_update: bool = False,
    ) -> Optional[CreditSale]:
        stmt = (
            select(CreditSaleModel)
            .options(selectinload(CreditSaleModel.installments))
            .where(CreditSaleModel.id == str(sale_id))
            .execution_options(populate_existing=True)
        )
        if for_update:
            # Row lock held until commit; SQLite compiles this away
            stmt = stmt.with_for_update(of=CreditSaleModel)
        with storage_errors("get_credit_sale"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_installment_id(self, installment_id: UUID) -> Optional[CreditSale]:
        stmt = (
            select(CreditSaleModel)
            .join(InstallmentModel, InstallmentModel.credit_sale_id == CreditSaleModel.id)
            .options(selectinload(CreditSaleModel.installments))
            .where(InstallmentModel.id == str(installment_id))
            .execution_options(populate_existing=True)
        )
        with storage_errors("get_credit_sale_by_installment"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def list_all(self) -> List[CreditSale]:
        stmt = (
            select(CreditSaleModel)
            .options(selectinload(CreditSaleModel.installments))
            .order_by(CreditSaleModel.sale_date.desc(), CreditSaleModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        with storage_errors("list_credit_sales"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def list_unpaid(self) -> List[CreditSale]:
        stmt = (
            select(CreditSaleModel)
            .options(selectinload(CreditSaleModel.installments))
            .where(CreditSaleModel.status != CreditSaleStatus.PAID.value)
            .order_by(CreditSaleModel.created_at.asc())
            .execution_options(populate_existing=True)
        )
        with storage_errors("list_unpaid_credit_sales"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def mark_installment_paid(
        self,
        installment_id: UUID,
        paid_date: date,
        payment_method: str,
    ) -> bool:
        stmt = (
            update(InstallmentModel)
            .where(
                InstallmentModel.id == str(installment_id),
                InstallmentModel.status != InstallmentStatus.PAID.value,
            )
            .values(
                status=InstallmentStatus.PAID.value,
                paid_date=paid_date,
                payment_method=payment_method,
            )
            .execution_options(synchronize_session=False)
        )
        with storage_errors("mark_installment_paid"):
            result = await self._session.execute(stmt)

        return result.rowcount == 1

    async def save_status_refresh(
        self,
        sale: CreditSale,
        installments: List[Installment],
    ) -> None:
        with storage_errors("save_status_refresh"):
            await self._session.execute(
                update(CreditSaleModel)
                .where(CreditSaleModel.id == str(sale.id))
                .values(
                    status=sale.status.value,
                    total_paid_cents=sale.total_paid_cents,
                    remaining_cents=sale.remaining_cents,
                )
                .execution_options(synchronize_session=False)
            )

            for installment in installments:
                await self._session.execute(
                    update(InstallmentModel)
                    .where(InstallmentModel.id == str(installment.id))
                    .values(status=installment.status.value)
                    .execution_options(synchronize_session=False)
                )

            await self._session.flush()

    async def commit(self) -> None:
        with storage_errors("commit"):
            await self._session.commit()

    def _to_entity(self, model: CreditSaleModel) -> CreditSale:
        installments = [
            Installment(
                id=UUID(inst.id),
                credit_sale_id=UUID(inst.credit_sale_id),
                installment_number=inst.installment_number,
                amount_cents=inst.amount_cents,
                due_date=inst.due_date,
                status=InstallmentStatus(inst.status),
                paid_date=inst.paid_date,
                payment_method=inst.payment_method,
                created_at=inst.created_at,
            )
            for inst in model.installments
        ]

        return CreditSale(
            id=UUID(model.id),
            client_id=model.client_id,
            client_name=model.client_name,
            products=model.products,
            subtotal_cents=model.subtotal_cents,
            discount_cents=model.discount_cents,
            total_cents=model.total_cents,
            number_of_installments=model.number_of_installments,
            first_due_date=model.first_due_date,
            sale_date=model.sale_date,
            status=CreditSaleStatus(model.status),
            total_paid_cents=model.total_paid_cents,
            remaining_cents=model.remaining_cents,
            installments=installments,
            created_at=model.created_at,
        )
