"""Call log API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rentbill.core.database import get_db
from rentbill.models.call_log import CallLog, CallType
from rentbill.repositories.call_log_repository import CallLogRepository
from rentbill.schemas.call_log import CallLogResponse

router = APIRouter()


@router.get("/", response_model=list[CallLogResponse])
async def list_call_logs(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    entity_id: UUID | None = None,
    call_date: date | None = None,
    call_type: CallType | None = None,
    db: Session = Depends(get_db),
) -> list[CallLog]:
    """List call logs with optional filters."""
    repo = CallLogRepository(db)
    return repo.get_all(
        skip=skip, limit=limit, entity_id=entity_id, call_date=call_date, call_type=call_type
    )
