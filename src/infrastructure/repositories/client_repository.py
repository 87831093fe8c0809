"""Read-only access to the client registry."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Client
from src.domain.interfaces import ClientRepository
from src.infrastructure.database.models import ClientModel

from .errors import storage_errors


class PostgresClientRepository(ClientRepository):
    """PostgreSQL-backed client lookups."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, client_id: int) -> Optional[Client]:
        with storage_errors("get_client"):
            model = await self._session.get(ClientModel, client_id)

        return self._to_entity(model) if model else None

    async def find_by_full_name(self, full_name: str) -> List[Client]:
        # Case-insensitive, whitespace-trimmed equality
        stmt = (
            select(ClientModel)
            .where(func.lower(func.trim(ClientModel.full_name)) == full_name.strip().lower())
            .order_by(ClientModel.id.asc())
        )
        with storage_errors("find_clients_by_name"):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: ClientModel) -> Client:
        return Client(
            id=model.id,
            full_name=model.full_name,
            whatsapp=model.whatsapp,
            nickname=model.nickname,
        )
