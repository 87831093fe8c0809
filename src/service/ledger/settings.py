"""
Ledger Settings for the credit sale engine.

Business parameters for credit sales, overridable via environment
variables with the LEDGER_ prefix:
    LEDGER_TIMEZONE=America/Sao_Paulo
    LEDGER_MAX_INSTALLMENTS=24
    LEDGER_CREDIT_SALES_ENABLED_DEFAULT=true

Usage:
    from src.service.ledger.settings import ledger_settings

    limit = ledger_settings.max_installments

    # Or create custom settings for testing
    custom = LedgerSettings(max_installments=6)
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Configurable parameters for the credit sale ledger.

    All monetary values are in cents (centavos).
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone used to decide which calendar day is 'today'",
    )
    max_installments: int = Field(
        default=24,
        ge=1,
        description="Maximum number of installments for one credit sale",
    )
    credit_sales_enabled_default: bool = Field(
        default=True,
        description="Whether credit sales are enabled before any setting is stored",
    )
    currency: str = Field(
        default="BRL",
        min_length=3,
        max_length=3,
        description="ISO 4217 currency code used for receipts",
    )
    locale: str = Field(
        default="pt_BR",
        description="Locale used to format receipt amounts",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names the system database does not know."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v


@lru_cache
def get_ledger_settings() -> LedgerSettings:
    """Get cached ledger settings instance."""
    return LedgerSettings()


ledger_settings = get_ledger_settings()
