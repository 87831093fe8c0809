"""Input validation exception."""

from typing import List

from .base import DomainException


class ValidationException(DomainException):
    """Raised when a request breaks a business rule before any state change."""

    def __init__(self, errors: List[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(
            message="; ".join(errors),
            code="VALIDATION_ERROR",
        )
        self.errors = list(errors)
