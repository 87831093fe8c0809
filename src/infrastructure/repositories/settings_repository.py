"""PostgreSQL repository implementation for system settings."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import SystemSettings
from src.domain.interfaces import SystemSettingsRepository
from src.infrastructure.database.models import SystemSettingsModel

from .errors import storage_errors

_SETTINGS_ROW_ID = 1


class PostgresSystemSettingsRepository(SystemSettingsRepository):
    """Single-row settings store."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self) -> Optional[SystemSettings]:
        with storage_errors("get_system_settings"):
            model = await self._session.get(SystemSettingsModel, _SETTINGS_ROW_ID)

        if model is None:
            return None

        return SystemSettings(
            credit_sales_enabled=model.credit_sales_enabled,
            updated_at=model.updated_at,
        )

    async def save(self, settings: SystemSettings) -> SystemSettings:
        with storage_errors("save_system_settings"):
            model = await self._session.get(SystemSettingsModel, _SETTINGS_ROW_ID)
            if model is None:
                model = SystemSettingsModel(id=_SETTINGS_ROW_ID)
                self._session.add(model)

            model.credit_sales_enabled = settings.credit_sales_enabled
            model.updated_at = settings.updated_at
            await self._session.flush()

        return settings
