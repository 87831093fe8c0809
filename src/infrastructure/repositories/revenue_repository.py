"""PostgreSQL repository implementation for revenue transactions."""

from datetime import date
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import RevenueTransaction, RevenueType
from src.domain.interfaces import RevenueRepository
from src.infrastructure.database.models import RevenueTransactionModel

from .errors import storage_errors


class PostgresRevenueRepository(RevenueRepository):
    """PostgreSQL-backed revenue transaction repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, transaction: RevenueTransaction) -> RevenueTransaction:
        model = RevenueTransactionModel(
            id=str(transaction.id),
            client_id=transaction.client_id,
            client_name=transaction.client_name,
            description=transaction.description,
            transaction_date=transaction.date,
            payment_method=transaction.payment_method,
            subtotal_cents=transaction.subtotal_cents,
            discount_cents=transaction.discount_cents,
            value_cents=transaction.value_cents,
            type=transaction.type.value,
            created_at=transaction.created_at,
        )

        with storage_errors("add_revenue_transaction"):
            self._session.add(model)
            await self._session.flush()

        return transaction

    async def list_between(self, start: date, end: date) -> List[RevenueTransaction]:
        stmt = (
            select(RevenueTransactionModel)
            .where(
                RevenueTransactionModel.transaction_date >= start,
                RevenueTransactionModel.transaction_date <= end,
            )
            .order_by(
                RevenueTransactionModel.transaction_date.asc(),
                RevenueTransactionModel.created_at.asc(),
            )
        )
        with storage_errors("list_revenue_transactions"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: RevenueTransactionModel) -> RevenueTransaction:
        return RevenueTransaction(
            id=UUID(model.id),
            client_id=model.client_id,
            client_name=model.client_name,
            description=model.description,
            date=model.transaction_date,
            payment_method=model.payment_method,
            subtotal_cents=model.subtotal_cents,
            discount_cents=model.discount_cents,
            value_cents=model.value_cents,
            type=RevenueType(model.type),
            created_at=model.created_at,
        )
