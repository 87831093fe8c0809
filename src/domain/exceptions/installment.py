"""Installment domain exceptions."""

from .base import DomainException


class InstallmentNotFoundException(DomainException):
    """Raised when an installment cannot be found."""

    def __init__(self, installment_id: str):
        super().__init__(
            message=f"Installment not found: {installment_id}",
            code="INSTALLMENT_NOT_FOUND",
        )
        self.installment_id = installment_id


class InstallmentAlreadyPaidException(DomainException):
    """Raised on an attempt to pay an installment twice."""

    def __init__(self, installment_id: str):
        super().__init__(
            message=f"Installment already paid: {installment_id}",
            code="ALREADY_PAID",
        )
        self.installment_id = installment_id


class InstallmentNotPaidException(DomainException):
    """Raised when a receipt is requested for an open installment."""

    def __init__(self, installment_id: str):
        super().__init__(
            message=f"Installment has not been paid: {installment_id}",
            code="INSTALLMENT_NOT_PAID",
        )
        self.installment_id = installment_id


class DataIntegrityException(DomainException):
    """Raised when stored installment data contradicts itself."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="DATA_INTEGRITY_ERROR",
        )
