"""System settings schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class SystemSettingsSchema(BaseModel):
    """Schema for GET /v1/settings response."""

    credit_sales_enabled: bool = Field(..., description="Whether new credit sales are accepted")
    updated_at: datetime


class UpdateSystemSettingsSchema(BaseModel):
    """Schema for PUT /v1/settings request body."""

    credit_sales_enabled: bool
