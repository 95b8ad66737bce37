from enum import Enum

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)

from rentbill.core.database import Base
from rentbill.models.shared import UUIDType, generate_uuid


class OverdueChargeStatus(str, Enum):
    PENDING = "pending"
    CHARGED = "charged"
    FAILED = "failed"


class OverdueCharge(Base):
    """Daily overdue charge record.

    At most one row per rental per calendar day. The unique constraint is
    what stops a second batch run from charging the same rental twice.
    """

    __tablename__ = "overdue_charges"
    __table_args__ = (
        UniqueConstraint("rental_id", "charge_date", name="uq_overdue_charge_rental_day"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    rental_id = Column(
        UUIDType, ForeignKey("rentals.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    charge_date = Column(Date, nullable=False, index=True)
    days_overdue = Column(Integer, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="ILS")
    status = Column(String(20), nullable=False, default=OverdueChargeStatus.PENDING.value)
    transaction_id = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
