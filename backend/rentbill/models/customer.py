from sqlalchemy import Column, DateTime, String, Text, func

from rentbill.core.database import Base
from rentbill.models.shared import UUIDType, generate_uuid


class Customer(Base):
    """Customer owned by the booking subsystem.

    The settlement pipeline only reads it, and refreshes the stored payment
    token after a successful charge. A stored token is never cleared here.
    """

    __tablename__ = "customers"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)

    # Stored card credential (gateway-issued token, never the card itself)
    payment_token = Column(Text, nullable=True)
    payment_token_last4 = Column(String(4), nullable=True)
    payment_token_expiry = Column(String(10), nullable=True)
    payment_token_updated_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
