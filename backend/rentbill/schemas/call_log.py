from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CallLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    entity_type: str
    entity_id: UUID
    customer_id: UUID | None = None
    customer_phone: str
    call_status: str
    call_type: str
    call_date: date
    call_message: str | None = None
    campaign_id: str | None = None
    error_message: str | None = None
    created_at: datetime
