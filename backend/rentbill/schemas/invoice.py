from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    invoice_number: int
    rental_id: UUID | None = None
    customer_id: UUID | None = None
    customer_name: str
    transaction_id: str | None = None
    amount: Decimal
    currency: str
    description: str | None = None
    status: str
    business_name: str
    business_id: str
    issued_at: datetime
