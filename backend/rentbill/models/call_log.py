"""CallLog model and the entity reference it points at."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, assert_never
from uuid import UUID

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, UniqueConstraint, func

from rentbill.core.database import Base
from rentbill.models.shared import UUIDType, generate_uuid


class CallStatus(str, Enum):
    PENDING = "pending"
    ANSWERED = "answered"
    NO_ANSWER = "no_answer"
    BUSY = "busy"
    CALLBACK = "callback"


class CallType(str, Enum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"


@dataclass(frozen=True)
class RentalRef:
    id: UUID
    kind: Literal["rental"] = "rental"


@dataclass(frozen=True)
class RepairRef:
    id: UUID
    kind: Literal["repair"] = "repair"


EntityRef = RentalRef | RepairRef


def entity_columns(ref: EntityRef) -> tuple[str, UUID]:
    """Flatten an entity reference into its (entity_type, entity_id) columns."""
    match ref:
        case RentalRef(id=entity_id):
            return "rental", entity_id
        case RepairRef(id=entity_id):
            return "repair", entity_id
        case _:
            assert_never(ref)


def entity_from_columns(entity_type: str, entity_id: UUID) -> EntityRef:
    if entity_type == "rental":
        return RentalRef(id=entity_id)
    if entity_type == "repair":
        return RepairRef(id=entity_id)
    raise ValueError(f"Unknown entity type: {entity_type}")


class CallLog(Base):
    __tablename__ = "call_logs"
    __table_args__ = (
        UniqueConstraint(
            "entity_type",
            "entity_id",
            "call_date",
            "call_type",
            name="uq_call_log_entity_day_type",
        ),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(UUIDType, nullable=False, index=True)
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    customer_phone = Column(String(50), nullable=False)
    call_status = Column(String(20), nullable=False, default=CallStatus.PENDING.value)
    call_type = Column(String(20), nullable=False, default=CallType.MANUAL.value)
    call_date = Column(Date, nullable=False, index=True)
    call_message = Column(Text, nullable=True)
    campaign_id = Column(String(100), nullable=True, index=True)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def entity(self) -> EntityRef:
        return entity_from_columns(str(self.entity_type), self.entity_id)  # type: ignore[arg-type]
