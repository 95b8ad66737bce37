from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rentbill.models.call_log import CallLog, CallStatus, CallType, EntityRef, entity_columns


class CallLogRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        entity_id: UUID | None = None,
        call_date: date | None = None,
        call_type: CallType | None = None,
    ) -> list[CallLog]:
        query = self.db.query(CallLog)
        if entity_id:
            query = query.filter(CallLog.entity_id == entity_id)
        if call_date:
            query = query.filter(CallLog.call_date == call_date)
        if call_type:
            query = query.filter(CallLog.call_type == call_type.value)
        return query.order_by(CallLog.created_at.desc()).offset(skip).limit(limit).all()

    def get_for_day(
        self, entity: EntityRef, call_date: date, call_type: CallType = CallType.AUTOMATIC
    ) -> CallLog | None:
        entity_type, entity_id = entity_columns(entity)
        return (
            self.db.query(CallLog)
            .filter(
                CallLog.entity_type == entity_type,
                CallLog.entity_id == entity_id,
                CallLog.call_date == call_date,
                CallLog.call_type == call_type.value,
            )
            .first()
        )

    def claim(
        self,
        entity: EntityRef,
        customer_id: UUID | None,
        customer_phone: str,
        call_date: date,
        call_message: str,
        call_type: CallType = CallType.AUTOMATIC,
    ) -> CallLog | None:
        """Insert the day's call row before dialing.

        Returns None if the entity already has a call of this type today.
        """
        entity_type, entity_id = entity_columns(entity)
        log = CallLog(
            entity_type=entity_type,
            entity_id=entity_id,
            customer_id=customer_id,
            customer_phone=customer_phone,
            call_status=CallStatus.PENDING.value,
            call_type=call_type.value,
            call_date=call_date,
            call_message=call_message,
        )
        self.db.add(log)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(log)
        return log

    def record_campaign(
        self, log: CallLog, campaign_id: str | None, error_message: str | None = None
    ) -> CallLog:
        log.campaign_id = campaign_id  # type: ignore[assignment]
        log.error_message = error_message  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(log)
        return log
