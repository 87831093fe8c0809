"""System settings endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import SystemSettingsService
from src.core.dependencies import get_settings_service
from src.presentation.schemas import SystemSettingsSchema, UpdateSystemSettingsSchema

settings_router = APIRouter(prefix="/settings")


@settings_router.get(
    "",
    response_model=SystemSettingsSchema,
    summary="Get Settings",
)
async def get_settings(
    service: Annotated[SystemSettingsService, Depends(get_settings_service)],
) -> SystemSettingsSchema:
    current = await service.get_settings()
    return SystemSettingsSchema(
        credit_sales_enabled=current.credit_sales_enabled,
        updated_at=current.updated_at,
    )


@settings_router.put(
    "",
    response_model=SystemSettingsSchema,
    summary="Update Settings",
    description="Switch credit sales on or off. Existing sales are not affected.",
)
async def update_settings(
    request: UpdateSystemSettingsSchema,
    service: Annotated[SystemSettingsService, Depends(get_settings_service)],
) -> SystemSettingsSchema:
    saved = await service.set_credit_sales_enabled(request.credit_sales_enabled)
    return SystemSettingsSchema(
        credit_sales_enabled=saved.credit_sales_enabled,
        updated_at=saved.updated_at,
    )
