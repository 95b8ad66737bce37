from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func

from rentbill.core.database import Base
from rentbill.models.shared import UUIDType, generate_uuid


class InvoiceStatus(str, Enum):
    ISSUED = "issued"


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    invoice_number = Column(Integer, unique=True, index=True, nullable=False)
    rental_id = Column(
        UUIDType, ForeignKey("rentals.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    customer_name = Column(String(255), nullable=False)
    transaction_id = Column(String(255), nullable=True, index=True)

    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="ILS")
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=InvoiceStatus.ISSUED.value)

    # Issuing business identity
    business_name = Column(String(255), nullable=False)
    business_id = Column(String(50), nullable=False)

    issued_at = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
