"""Shared test fixtures for all test modules."""

import contextlib
import uuid
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rentbill.core import database as db_module
from rentbill.core.config import settings
from rentbill.core.database import Base
from rentbill.models.customer import Customer
from rentbill.models.rental import ItemCategory, Rental, RentalItem, RentalStatus

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# A Monday, so the weekly rest day never interferes by accident
TODAY = date(2026, 10, 19)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def gateway_credentials():
    """Configure Pelecard credentials for the duration of a test."""
    with (
        patch.object(settings, "pelecard_terminal", "0962210"),
        patch.object(settings, "pelecard_user", "testuser"),
        patch.object(settings, "pelecard_password", "testpass"),
    ):
        yield


@pytest.fixture
def telephony_credentials():
    """Configure Yemot credentials for the duration of a test."""
    with (
        patch.object(settings, "yemot_system_number", "0773137770"),
        patch.object(settings, "yemot_password", "secret"),
    ):
        yield


def create_customer(
    session: Session,
    name: str = "Test Customer",
    phone: str | None = "050-123-4567",
    payment_token: str | None = "tok_abc123",
) -> Customer:
    customer = Customer(
        id=uuid.uuid4(),
        name=name,
        phone=phone,
        payment_token=payment_token,
    )
    session.add(customer)
    session.commit()
    session.refresh(customer)
    return customer


def create_rental(
    session: Session,
    customer: Customer | None = None,
    end_date: date = date(2026, 10, 16),
    overdue_daily_rate: Decimal | None = Decimal("50.00"),
    overdue_grace_days: int | None = 0,
    auto_charge_enabled: bool = True,
    status: str = RentalStatus.ACTIVE.value,
    currency: str = "ILS",
    item_categories: tuple[str, ...] = (ItemCategory.SIM_EUROPEAN.value,),
) -> Rental:
    rental = Rental(
        id=uuid.uuid4(),
        customer_id=customer.id if customer else None,
        customer_name=customer.name if customer else "Walk-in Customer",
        start_date=date(2026, 10, 1),
        end_date=end_date,
        currency=currency,
        status=status,
        overdue_daily_rate=overdue_daily_rate,
        overdue_grace_days=overdue_grace_days,
        auto_charge_enabled=auto_charge_enabled,
    )
    session.add(rental)
    for category in item_categories:
        session.add(
            RentalItem(
                rental_id=rental.id,
                item_name=f"Item {category}",
                item_category=category,
                price_per_day=Decimal("10.00"),
            )
        )
    session.commit()
    session.refresh(rental)
    return rental
