"""Payment transaction schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChargeRequest(BaseModel):
    """Schema for an interactive card charge."""

    transaction_id: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    customer_name: str = Field(..., min_length=1)
    customer_id: UUID | None = None
    customer_identifier: str | None = None
    rental_id: UUID | None = None
    description: str | None = None

    token: str | None = None
    use_stored_token: bool = False
    card_number: str | None = None
    card_expiry: str | None = Field(default=None, description="MMYY")
    cvv: str | None = None

    @model_validator(mode="after")
    def check_credential(self) -> Self:
        has_card = bool(self.card_number and self.card_expiry and self.cvv)
        if self.use_stored_token and self.customer_id is None:
            raise ValueError("customer_id is required when use_stored_token is set")
        if not (self.token or self.use_stored_token or has_card):
            raise ValueError(
                "Either token, use_stored_token or card details "
                "(card_number, card_expiry, cvv) are required"
            )
        return self

    def __repr__(self) -> str:
        return (
            f"ChargeRequest(transaction_id={self.transaction_id!r}, amount={self.amount}, "
            f"customer_name={self.customer_name!r})"
        )


class ChargeResponse(BaseModel):
    success: bool
    transaction_id: str
    gateway_transaction_id: str | None = None
    invoice_number: int | None = None
    error: str | None = None
    error_code: str | None = None
    replayed: bool = False


class PaymentTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    transaction_id: str
    rental_id: UUID | None = None
    customer_id: UUID | None = None
    customer_name: str | None = None
    amount: Decimal
    currency: str
    status: str
    gateway_transaction_id: str | None = None
    error_message: str | None = None
    error_code: str | None = None
    created_at: datetime
    updated_at: datetime
