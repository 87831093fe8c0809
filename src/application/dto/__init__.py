"""Data Transfer Objects for application layer."""

from .credit_sale import (
    CreateCreditSaleRequest,
    CreditSaleListResponse,
    CreditSaleResponse,
    CreditSaleTotals,
    InstallmentDTO,
    PayInstallmentRequest,
    PaymentReceipt,
    RefreshResult,
)
from .revenue import RevenueEntryDTO, RevenueSummaryResponse

__all__ = [
    "CreateCreditSaleRequest",
    "CreditSaleListResponse",
    "CreditSaleResponse",
    "CreditSaleTotals",
    "InstallmentDTO",
    "PayInstallmentRequest",
    "PaymentReceipt",
    "RefreshResult",
    "RevenueEntryDTO",
    "RevenueSummaryResponse",
]
