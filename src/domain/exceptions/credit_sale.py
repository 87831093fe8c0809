"""Credit sale domain exceptions."""

from .base import DomainException


class CreditSaleNotFoundException(DomainException):
    """Raised when a credit sale cannot be found."""

    def __init__(self, credit_sale_id: str):
        super().__init__(
            message=f"Credit sale not found: {credit_sale_id}",
            code="CREDIT_SALE_NOT_FOUND",
        )
        self.credit_sale_id = credit_sale_id


class CreditSaleCreationFailedException(DomainException):
    """Raised when a sale and its installments could not be stored together."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Credit sale could not be created: {reason}",
            code="CREATION_FAILED",
        )
        self.reason = reason


class CreditSalesDisabledException(DomainException):
    """Raised when credit sales are switched off in the system settings."""

    def __init__(self):
        super().__init__(
            message="Credit sales are disabled",
            code="CREDIT_SALES_DISABLED",
        )
