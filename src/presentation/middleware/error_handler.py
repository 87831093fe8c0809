"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    CreditSaleCreationFailedException,
    CreditSaleNotFoundException,
    CreditSalesDisabledException,
    DataIntegrityException,
    DomainException,
    InstallmentAlreadyPaidException,
    InstallmentNotFoundException,
    InstallmentNotPaidException,
    PersistenceException,
    ValidationException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Most specific class wins; anything unlisted falls back to DomainException
STATUS_BY_EXCEPTION: dict[type[DomainException], int] = {
    ValidationException: 400,
    CreditSalesDisabledException: 403,
    CreditSaleNotFoundException: 404,
    InstallmentNotFoundException: 404,
    InstallmentAlreadyPaidException: 409,
    InstallmentNotPaidException: 409,
    CreditSaleCreationFailedException: 500,
    DataIntegrityException: 500,
    PersistenceException: 503,
}


def status_code_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in STATUS_BY_EXCEPTION:
            return STATUS_BY_EXCEPTION[exc_type]
    return 400


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(PersistenceException)
    async def persistence_error_handler(
        request: Request,
        exc: PersistenceException,
    ) -> JSONResponse:
        """Handle storage failures."""
        logger.error(
            "persistence_error",
            request_id=get_request_id(),
            operation=exc.operation,
            message=exc.message,
        )
        return JSONResponse(
            status_code=503,
            content={
                "error": exc.code,
                "message": "Storage temporarily unavailable. Please try again.",
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(DataIntegrityException)
    async def data_integrity_handler(
        request: Request,
        exc: DataIntegrityException,
    ) -> JSONResponse:
        """Handle contradictory stored data."""
        logger.error(
            "data_integrity_error",
            request_id=get_request_id(),
            message=exc.message,
        )
        return JSONResponse(
            status_code=500,
            content=exc.to_dict(get_request_id()),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies like business rule violations."""
        messages = [
            f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=ValidationException(messages).to_dict(get_request_id()),
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle the remaining domain exceptions."""
        status_code = status_code_for(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
            status_code=status_code,
        )
        return JSONResponse(
            status_code=status_code,
            content=exc.to_dict(get_request_id()),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
