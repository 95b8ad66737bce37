"""Tests for invoice issuance."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from rentbill.core.config import settings
from rentbill.core.database import get_db
from rentbill.models.invoice import InvoiceStatus
from rentbill.repositories.invoice_repository import InvoiceRepository
from rentbill.services.invoice_service import InvoiceService


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def service(db_session):
    return InvoiceService(db_session)


class TestIssueForTransaction:
    def test_issues_invoice_with_business_identity(self, service):
        invoice = service.issue_for_transaction(
            transaction_id="txn-1",
            customer_name="Dana Levi",
            amount=Decimal("75.50"),
            currency="ILS",
            description="Daily overdue rental charge - day 2",
        )

        assert invoice is not None
        assert invoice.invoice_number == 1
        assert invoice.status == InvoiceStatus.ISSUED.value
        assert invoice.business_name == settings.business_name
        assert invoice.business_id == settings.business_id
        assert invoice.amount == Decimal("75.50")
        assert invoice.issued_at is not None

    def test_numbers_are_sequential(self, service):
        numbers = [
            service.issue_for_transaction(
                transaction_id=f"txn-{i}",
                customer_name="Dana",
                amount=Decimal("10"),
                currency="ILS",
            ).invoice_number
            for i in range(3)
        ]
        assert numbers == [1, 2, 3]

    def test_same_transaction_returns_existing(self, db_session, service):
        first = service.issue_for_transaction(
            transaction_id="txn-x", customer_name="Dana", amount=Decimal("10"), currency="ILS"
        )
        second = service.issue_for_transaction(
            transaction_id="txn-x", customer_name="Dana", amount=Decimal("10"), currency="ILS"
        )

        assert first.id == second.id
        assert len(InvoiceRepository(db_session).get_all()) == 1

    def test_number_clash_is_retried(self, db_session, service):
        service.issue_for_transaction(
            transaction_id="txn-a", customer_name="Dana", amount=Decimal("10"), currency="ILS"
        )

        # A concurrent run already took number 1 when this one computed it
        with patch.object(service.invoice_repo, "_next_invoice_number", side_effect=[1, 2]):
            invoice = service.issue_for_transaction(
                transaction_id="txn-b", customer_name="Noa", amount=Decimal("20"), currency="ILS"
            )

        assert invoice is not None
        assert invoice.invoice_number == 2
        assert invoice.transaction_id == "txn-b"
        assert len(InvoiceRepository(db_session).get_all()) == 2

    def test_repeated_number_clash_gives_up(self, db_session, service, caplog):
        service.issue_for_transaction(
            transaction_id="txn-a", customer_name="Dana", amount=Decimal("10"), currency="ILS"
        )

        with patch.object(service.invoice_repo, "_next_invoice_number", return_value=1):
            invoice = service.issue_for_transaction(
                transaction_id="txn-b", customer_name="Noa", amount=Decimal("20"), currency="ILS"
            )

        assert invoice is None
        assert "Failed to issue invoice for transaction txn-b" in caplog.text
        assert InvoiceRepository(db_session).get_by_transaction_id("txn-b") is None

    def test_failure_is_swallowed_and_logged(self, db_session, service, caplog):
        with patch.object(service.invoice_repo, "create", side_effect=RuntimeError("db down")):
            invoice = service.issue_for_transaction(
                transaction_id="txn-err",
                customer_name="Dana",
                amount=Decimal("10"),
                currency="ILS",
            )

        assert invoice is None
        assert "Failed to issue invoice for transaction txn-err" in caplog.text


class TestInvoiceRepository:
    def test_get_by_invoice_number(self, db_session, service):
        service.issue_for_transaction(
            transaction_id="txn-a", customer_name="Dana", amount=Decimal("10"), currency="ILS"
        )
        repo = InvoiceRepository(db_session)
        assert repo.get_by_invoice_number(1).transaction_id == "txn-a"
        assert repo.get_by_invoice_number(99) is None

    def test_get_all_newest_first(self, db_session, service):
        for i in range(3):
            service.issue_for_transaction(
                transaction_id=f"txn-{i}", customer_name="Dana", amount=Decimal("1"), currency="ILS"
            )
        invoices = InvoiceRepository(db_session).get_all()
        assert [inv.invoice_number for inv in invoices] == [3, 2, 1]
