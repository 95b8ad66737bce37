from enum import Enum

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from rentbill.core.database import Base
from rentbill.models.shared import UUIDType, generate_uuid


class RentalStatus(str, Enum):
    ACTIVE = "active"
    OVERDUE = "overdue"
    RETURNED = "returned"


class ItemCategory(str, Enum):
    SIM_AMERICAN = "sim_american"
    SIM_EUROPEAN = "sim_european"
    DEVICE_SIMPLE = "device_simple"
    DEVICE_SMARTPHONE = "device_smartphone"
    MODEM = "modem"
    NETSTICK = "netstick"


# Categories that need a live cellular line and so trigger reminder calls
SIM_CATEGORIES = frozenset({ItemCategory.SIM_AMERICAN.value, ItemCategory.SIM_EUROPEAN.value})


class Rental(Base):
    __tablename__ = "rentals"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    customer_id = Column(
        UUIDType, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    customer_name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False, index=True)
    currency = Column(String(3), nullable=False, default="ILS")
    status = Column(String(20), nullable=False, default=RentalStatus.ACTIVE.value, index=True)

    # Overdue policy
    overdue_daily_rate = Column(Numeric(12, 2), nullable=True)
    overdue_grace_days = Column(Integer, nullable=True)
    auto_charge_enabled = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship("RentalItem", back_populates="rental", lazy="selectin")

    @property
    def has_sim(self) -> bool:
        return any(item.item_category in SIM_CATEGORIES for item in self.items)


class RentalItem(Base):
    __tablename__ = "rental_items"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    rental_id = Column(
        UUIDType, ForeignKey("rentals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_name = Column(String(255), nullable=False)
    item_category = Column(String(30), nullable=False)
    price_per_day = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    rental = relationship("Rental", back_populates="items")
