"""PaymentTransaction model: one row per charge attempt, keyed by idempotency id."""

from enum import Enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Numeric, String, Text, func

from rentbill.core.database import Base
from rentbill.models.shared import UUIDType, generate_uuid


class TransactionStatus(str, Enum):
    """Transaction status enum.

    ``pending`` is only ever left behind by a crash between the gateway call
    and the status update. It means "inconclusive": never retried
    automatically.
    """

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class PaymentTransaction(Base):
    __tablename__ = "payment_transactions"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    transaction_id = Column(String(255), nullable=False, unique=True, index=True)
    rental_id = Column(
        UUIDType, ForeignKey("rentals.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    customer_name = Column(String(255), nullable=True)

    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="ILS")
    status = Column(String(20), nullable=False, default=TransactionStatus.PENDING.value)

    gateway_transaction_id = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)
    error_code = Column(String(20), nullable=True)
    # Stored verbatim; only a few known fields are ever interpreted
    gateway_response = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
