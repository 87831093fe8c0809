"""Storage-related domain exceptions."""

from .base import DomainException


class PersistenceException(DomainException):
    """Raised when the storage backend fails; the cause is not interpreted."""

    def __init__(self, operation: str, detail: str | None = None):
        message = f"Storage failure during {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
        )
        self.operation = operation
