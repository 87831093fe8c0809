"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .credit_sale import (
    CreditSaleCreationFailedException,
    CreditSaleNotFoundException,
    CreditSalesDisabledException,
)
from .installment import (
    DataIntegrityException,
    InstallmentAlreadyPaidException,
    InstallmentNotFoundException,
    InstallmentNotPaidException,
)
from .persistence import PersistenceException
from .validation import ValidationException

__all__ = [
    "DomainException",
    "CreditSaleCreationFailedException",
    "CreditSaleNotFoundException",
    "CreditSalesDisabledException",
    "DataIntegrityException",
    "InstallmentAlreadyPaidException",
    "InstallmentNotFoundException",
    "InstallmentNotPaidException",
    "PersistenceException",
    "ValidationException",
]
