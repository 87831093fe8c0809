"""System settings service - reads and switches shop-level features."""

from datetime import datetime

import structlog

from src.domain.entities import SystemSettings
from src.domain.interfaces import SystemSettingsRepository
from src.service.ledger import LedgerSettings, ledger_settings

logger = structlog.get_logger(__name__)


class SystemSettingsService:
    """Application service for the system settings row."""

    def __init__(
        self,
        settings_repository: SystemSettingsRepository,
        settings: LedgerSettings = ledger_settings,
    ):
        self._settings_repo = settings_repository
        self._settings = settings

    async def get_settings(self) -> SystemSettings:
        """Stored settings, or the configured defaults if none were saved."""
        stored = await self._settings_repo.get()
        if stored is None:
            return SystemSettings(
                credit_sales_enabled=self._settings.credit_sales_enabled_default,
            )
        return stored

    async def set_credit_sales_enabled(self, enabled: bool) -> SystemSettings:
        current = await self.get_settings()
        current.credit_sales_enabled = enabled
        current.updated_at = datetime.utcnow()

        saved = await self._settings_repo.save(current)

        logger.info("credit_sales_toggled", enabled=enabled)

        return saved
