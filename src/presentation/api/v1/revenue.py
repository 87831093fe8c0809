"""Revenue report endpoint."""

from dataclasses import asdict
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.application.services import RevenueService
from src.core.dependencies import get_revenue_service
from src.presentation.schemas import ErrorResponseSchema, RevenueSummarySchema

revenue_router = APIRouter(prefix="/revenue")


@revenue_router.get(
    "",
    response_model=RevenueSummarySchema,
    summary="Revenue Summary",
    description="Money received between two dates (inclusive), installment payments included.",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid date range"},
    },
)
async def get_revenue_summary(
    start: Annotated[date, Query(description="First day of the period")],
    end: Annotated[date, Query(description="Last day of the period")],
    service: Annotated[RevenueService, Depends(get_revenue_service)],
) -> RevenueSummarySchema:
    summary = await service.summarize(start, end)
    return RevenueSummarySchema.model_validate(asdict(summary))
