"""Pydantic schemas for API request/response validation."""

from .credit_sale import (
    CreateCreditSaleSchema,
    CreditSaleListResponseSchema,
    CreditSaleResponseSchema,
    CreditSaleTotalsSchema,
    InstallmentSchema,
    PayInstallmentSchema,
    PaymentReceiptSchema,
    RefreshResultSchema,
)
from .error import ErrorResponseSchema
from .revenue import RevenueEntrySchema, RevenueSummarySchema
from .settings import SystemSettingsSchema, UpdateSystemSettingsSchema

__all__ = [
    "CreateCreditSaleSchema",
    "CreditSaleListResponseSchema",
    "CreditSaleResponseSchema",
    "CreditSaleTotalsSchema",
    "InstallmentSchema",
    "PayInstallmentSchema",
    "PaymentReceiptSchema",
    "RefreshResultSchema",
    "ErrorResponseSchema",
    "RevenueEntrySchema",
    "RevenueSummarySchema",
    "SystemSettingsSchema",
    "UpdateSystemSettingsSchema",
]
