from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RentalResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    rental_id: UUID
    status: str
    amount: Decimal | None = None
    error: str | None = None
    step: str | None = None


class BatchSummaryResponse(BaseModel):
    """Aggregate outcome of one overdue batch run."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    skipped: bool
    processed: int
    successful: int
    charged: int
    results: list[RentalResultResponse] = []
    error: str | None = None


class OverdueChargeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    rental_id: UUID
    customer_id: UUID | None = None
    charge_date: date
    days_overdue: int
    amount: Decimal
    currency: str
    status: str
    transaction_id: str | None = None
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime
