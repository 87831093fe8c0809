"""Revenue report schemas."""

from pydantic import BaseModel, Field


class RevenueEntrySchema(BaseModel):
    transaction_id: str
    date: str
    client_name: str
    description: str = Field(..., examples=["Fiado - Joao Silva - Parcela 1/3"])
    payment_method: str
    value_cents: int
    type: str


class RevenueSummarySchema(BaseModel):
    """Schema for GET /v1/revenue response."""

    start: str
    end: str
    total_cents: int
    by_payment_method: dict[str, int] = Field(
        ...,
        description="Amount received per payment method, in cents",
    )
    entries: list[RevenueEntrySchema]
