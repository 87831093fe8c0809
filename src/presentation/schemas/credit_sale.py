"""Credit sale related Pydantic schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateCreditSaleSchema(BaseModel):
    """Schema for POST /v1/credit-sales request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "client_name": "Joao Silva",
                    "products": "Pomada modeladora, Shampoo",
                    "subtotal_cents": 10000,
                    "discount_cents": 0,
                    "number_of_installments": 3,
                    "first_due_date": "2025-02-10",
                }
            ]
        }
    )
    client_name: str = Field(
        ...,
        max_length=255,
        description="Client name as typed at the counter",
        examples=["Joao Silva"],
    )
    client_id: Optional[int] = Field(
        None,
        description="Registered client id; when omitted the name is matched",
    )
    products: str = Field(
        ...,
        description="Free-text list of what was sold",
        examples=["Pomada modeladora"],
    )
    subtotal_cents: int = Field(
        ...,
        description="Amount before discount, in cents",
        examples=[10000],
    )
    discount_cents: int = Field(
        0,
        description="Discount in cents; must be less than the subtotal",
        examples=[0],
    )
    number_of_installments: int = Field(
        ...,
        description="How many monthly installments to split the total into",
        examples=[3],
    )
    first_due_date: date = Field(
        ...,
        description="Due date of installment 1 (YYYY-MM-DD)",
        examples=["2025-02-10"],
    )
    sale_date: Optional[date] = Field(
        None,
        description="Date of the sale; defaults to today in the shop's timezone",
    )


class PayInstallmentSchema(BaseModel):
    """Schema for POST /v1/credit-sales/installments/{id}/pay request body."""

    payment_method: str = Field(
        ...,
        max_length=50,
        description="How the client paid",
        examples=["pix"],
    )
    paid_date: Optional[date] = Field(
        None,
        description="Date the money was received; defaults to today",
    )

    @field_validator("payment_method")
    @classmethod
    def strip_payment_method(cls, v: str) -> str:
        return v.strip()


class InstallmentSchema(BaseModel):
    """Schema for an installment in the credit sale response."""

    installment_id: str = Field(..., description="UUID of the installment")
    installment_number: int = Field(..., ge=1, examples=[1])
    amount_cents: int = Field(..., description="Installment amount in cents", examples=[3333])
    due_date: str = Field(
        ...,
        description="Due date in ISO 8601 format (YYYY-MM-DD)",
        examples=["2025-02-10"],
    )
    status: str = Field(..., description="pending, paid or overdue", examples=["pending"])
    paid_date: Optional[str] = Field(None, examples=["2025-02-08"])
    payment_method: Optional[str] = Field(None, examples=["pix"])


class CreditSaleResponseSchema(BaseModel):
    """Schema for a credit sale with its installments."""

    credit_sale_id: str = Field(..., description="UUID of the credit sale")
    client_name: str
    client_id: Optional[int] = None
    products: str
    subtotal_cents: int
    discount_cents: int
    total_cents: int = Field(..., description="subtotal minus discount", examples=[10000])
    number_of_installments: int
    first_due_date: str
    sale_date: str
    status: str = Field(..., description="active, paid or overdue", examples=["active"])
    total_paid_cents: int
    remaining_cents: int
    paid_count: int
    next_due_date: Optional[str] = Field(
        None,
        description="Earliest due date among unpaid installments",
    )
    installments: list[InstallmentSchema]


class CreditSaleTotalsSchema(BaseModel):
    """Totals over the listed credit sales."""

    count: int
    overdue_count: int
    total_cents: int
    total_paid_cents: int
    remaining_cents: int


class CreditSaleListResponseSchema(BaseModel):
    """Schema for GET /v1/credit-sales response."""

    sales: list[CreditSaleResponseSchema]
    totals: CreditSaleTotalsSchema


class RefreshResultSchema(BaseModel):
    """Schema for POST /v1/credit-sales/refresh response."""

    today: str = Field(..., description="Calendar day the statuses were resolved for")
    sales_scanned: int
    sales_updated: int
    installments_updated: int


class PaymentReceiptSchema(BaseModel):
    """Schema for the receipt of a paid installment."""

    credit_sale_id: str
    installment_id: str
    client_name: str
    products: str
    installment_number: int
    number_of_installments: int
    amount_cents: int
    amount_display: str = Field(..., examples=["R$ 33,34"])
    paid_date: str
    payment_method: str
    remaining_cents: int = Field(
        ...,
        description="Balance left on the sale right after this payment",
    )
    remaining_display: str
