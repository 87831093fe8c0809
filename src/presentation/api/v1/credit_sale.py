"""Credit sale API endpoints."""

from dataclasses import asdict
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.application.dto import CreateCreditSaleRequest, PayInstallmentRequest
from src.application.services import CreditSaleService
from src.core.dependencies import get_credit_sale_service
from src.core.metrics import (
    record_credit_sale_created,
    record_installment_paid,
    record_payment_conflict,
    record_status_refresh,
    track_operation_latency,
)
from src.domain.entities import CreditSaleStatus
from src.domain.exceptions import InstallmentAlreadyPaidException
from src.presentation.schemas import (
    CreateCreditSaleSchema,
    CreditSaleListResponseSchema,
    CreditSaleResponseSchema,
    ErrorResponseSchema,
    PayInstallmentSchema,
    PaymentReceiptSchema,
    RefreshResultSchema,
)

credit_sale_router = APIRouter(
    prefix="/credit-sales",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)


@credit_sale_router.post(
    "",
    response_model=CreditSaleResponseSchema,
    status_code=201,
    summary="Register Credit Sale",
    description="Register a sale on credit and split it into monthly installments.",
    responses={
        201: {"description": "Credit sale created"},
        403: {"model": ErrorResponseSchema, "description": "Credit sales disabled"},
        500: {"model": ErrorResponseSchema, "description": "Sale could not be stored"},
    },
)
async def create_credit_sale(
    request: CreateCreditSaleSchema,
    service: Annotated[CreditSaleService, Depends(get_credit_sale_service)],
) -> CreditSaleResponseSchema:
    dto = CreateCreditSaleRequest(
        client_name=request.client_name,
        client_id=request.client_id,
        products=request.products,
        subtotal_cents=request.subtotal_cents,
        discount_cents=request.discount_cents,
        number_of_installments=request.number_of_installments,
        first_due_date=request.first_due_date,
        sale_date=request.sale_date,
    )

    with track_operation_latency("create"):
        response = await service.create_credit_sale(dto)

    record_credit_sale_created(response.total_cents)

    return CreditSaleResponseSchema.model_validate(asdict(response))


@credit_sale_router.get(
    "",
    response_model=CreditSaleListResponseSchema,
    summary="List Credit Sales",
    description="""
    List credit sales, newest sale date first, with totals.

    Statuses are resolved against today before filtering.
    """,
)
async def list_credit_sales(
    service: Annotated[CreditSaleService, Depends(get_credit_sale_service)],
    status: Annotated[
        Optional[CreditSaleStatus],
        Query(description="Only sales with this status"),
    ] = None,
) -> CreditSaleListResponseSchema:
    response = await service.list_credit_sales(status)
    return CreditSaleListResponseSchema.model_validate(asdict(response))


@credit_sale_router.post(
    "/refresh",
    response_model=RefreshResultSchema,
    summary="Refresh Overdue Statuses",
    description="Re-resolve every open installment and store the changed statuses.",
)
async def refresh_statuses(
    service: Annotated[CreditSaleService, Depends(get_credit_sale_service)],
) -> RefreshResultSchema:
    with track_operation_latency("refresh"):
        result = await service.refresh_all_statuses()

    record_status_refresh(result.sales_updated, result.installments_updated)

    return RefreshResultSchema.model_validate(asdict(result))


@credit_sale_router.post(
    "/installments/{installment_id}/pay",
    response_model=CreditSaleResponseSchema,
    summary="Pay Installment",
    description="Record the payment of one installment and book it as revenue.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Installment not found"},
        409: {"model": ErrorResponseSchema, "description": "Installment already paid"},
    },
)
async def pay_installment(
    installment_id: UUID,
    request: PayInstallmentSchema,
    service: Annotated[CreditSaleService, Depends(get_credit_sale_service)],
) -> CreditSaleResponseSchema:
    dto = PayInstallmentRequest(
        installment_id=installment_id,
        payment_method=request.payment_method,
        paid_date=request.paid_date,
    )

    try:
        with track_operation_latency("pay"):
            response = await service.pay_installment(dto)
    except InstallmentAlreadyPaidException:
        record_payment_conflict()
        raise

    paid = next(i for i in response.installments if i.installment_id == str(installment_id))
    record_installment_paid(dto.payment_method, paid.amount_cents)

    return CreditSaleResponseSchema.model_validate(asdict(response))


@credit_sale_router.get(
    "/{sale_id}",
    response_model=CreditSaleResponseSchema,
    summary="Get Credit Sale",
    description="Retrieve a credit sale with its installments.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Credit sale not found"},
    },
)
async def get_credit_sale(
    sale_id: UUID,
    service: Annotated[CreditSaleService, Depends(get_credit_sale_service)],
) -> CreditSaleResponseSchema:
    response = await service.get_sale_with_installments(sale_id)
    return CreditSaleResponseSchema.model_validate(asdict(response))


@credit_sale_router.get(
    "/{sale_id}/installments/{installment_id}/receipt",
    response_model=PaymentReceiptSchema,
    summary="Get Payment Receipt",
    description="Receipt of a paid installment, with formatted amounts.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Sale or installment not found"},
        409: {"model": ErrorResponseSchema, "description": "Installment not paid yet"},
    },
)
async def get_payment_receipt(
    sale_id: UUID,
    installment_id: UUID,
    service: Annotated[CreditSaleService, Depends(get_credit_sale_service)],
) -> PaymentReceiptSchema:
    receipt = await service.get_payment_receipt(sale_id, installment_id)
    return PaymentReceiptSchema.model_validate(asdict(receipt))
