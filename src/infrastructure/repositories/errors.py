"""Translation of storage driver errors into domain errors."""

from contextlib import contextmanager
from typing import Generator

import structlog
from sqlalchemy.exc import SQLAlchemyError

from src.domain.exceptions import PersistenceException

logger = structlog.get_logger(__name__)


@contextmanager
def storage_errors(operation: str) -> Generator[None, None, None]:
    """Re-raise SQLAlchemy failures as PersistenceException."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(
            "storage_error",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise PersistenceException(operation, type(exc).__name__) from exc
