"""Tests for automatic overdue reminder calls."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from rentbill.core.database import get_db
from rentbill.models.call_log import CallType, RentalRef
from rentbill.models.rental import ItemCategory
from rentbill.repositories.call_log_repository import CallLogRepository
from rentbill.services.overdue_call_service import OverdueCallService
from rentbill.services.overdue_results import RentalOutcome
from rentbill.services.telephony.yemot import CampaignResult, TelephonyError, YemotClient
from tests.conftest import TODAY, create_customer, create_rental


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
def yemot():
    client = MagicMock(spec=YemotClient)
    client.run_campaign.return_value = CampaignResult(
        accepted=True, campaign_id="C-100", body={"responseStatus": "OK"}
    )
    return client


@pytest.fixture
def service(db_session, yemot):
    return OverdueCallService(db_session, client=yemot)


@pytest.fixture
def customer(db_session):
    return create_customer(db_session, name="Dana Levi", phone="050-123-4567")


class TestProcessRental:
    def test_places_call_and_logs_it(self, db_session, service, yemot, customer):
        rental = create_rental(db_session, customer)

        result = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.CALLED
        phones, message = yemot.run_campaign.call_args.args
        assert phones == ["0501234567"]
        assert "Dana Levi" in message

        log = CallLogRepository(db_session).get_for_day(RentalRef(id=rental.id), TODAY)
        assert log is not None
        assert log.entity == RentalRef(id=rental.id)
        assert log.call_type == CallType.AUTOMATIC.value
        assert log.call_date == TODAY
        assert log.customer_phone == "0501234567"
        assert log.customer_id == customer.id
        assert log.campaign_id == "C-100"
        assert log.call_message == message
        assert log.error_message is None

    def test_rental_without_sim_is_skipped(self, db_session, service, yemot, customer):
        rental = create_rental(
            db_session, customer, item_categories=(ItemCategory.DEVICE_SMARTPHONE.value,)
        )

        result = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.NO_SIM
        yemot.run_campaign.assert_not_called()

    def test_american_sim_is_called(self, db_session, service, customer):
        rental = create_rental(
            db_session,
            customer,
            item_categories=(ItemCategory.MODEM.value, ItemCategory.SIM_AMERICAN.value),
        )

        assert service.process_rental(rental, TODAY).status == RentalOutcome.CALLED

    def test_second_call_same_day_is_suppressed(self, db_session, service, yemot, customer):
        rental = create_rental(db_session, customer)

        service.process_rental(rental, TODAY)
        second = service.process_rental(rental, TODAY)

        assert second.status == RentalOutcome.ALREADY_CALLED
        assert yemot.run_campaign.call_count == 1

    def test_manual_call_does_not_block_automatic(self, db_session, service, yemot, customer):
        rental = create_rental(db_session, customer)
        CallLogRepository(db_session).claim(
            RentalRef(id=rental.id),
            customer_id=customer.id,
            customer_phone="0501234567",
            call_date=TODAY,
            call_message="Manual follow-up",
            call_type=CallType.MANUAL,
        )

        result = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.CALLED

    def test_next_day_is_called_again(self, db_session, service, yemot, customer):
        rental = create_rental(db_session, customer)

        service.process_rental(rental, TODAY)
        result = service.process_rental(rental, date(2026, 10, 20))

        assert result.status == RentalOutcome.CALLED
        assert yemot.run_campaign.call_count == 2

    def test_missing_phone_fails_without_log(self, db_session, service, yemot):
        customer = create_customer(db_session, phone=None)
        rental = create_rental(db_session, customer)

        result = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.CALL_FAILED
        assert result.error == "No phone number"
        yemot.run_campaign.assert_not_called()
        assert CallLogRepository(db_session).get_for_day(RentalRef(id=rental.id), TODAY) is None

    def test_telephony_error_still_counts_as_attempted(
        self, db_session, service, yemot, customer
    ):
        yemot.run_campaign.side_effect = TelephonyError("Yemot request failed: timeout")
        rental = create_rental(db_session, customer)

        result = service.process_rental(rental, TODAY)
        second = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.CALL_FAILED
        assert second.status == RentalOutcome.ALREADY_CALLED
        log = CallLogRepository(db_session).get_for_day(RentalRef(id=rental.id), TODAY)
        assert "timeout" in log.error_message
        assert log.campaign_id is None

    def test_rejected_campaign_is_call_failed(self, db_session, service, yemot, customer):
        yemot.run_campaign.return_value = CampaignResult(accepted=False, body={"raw": "ERR"})
        rental = create_rental(db_session, customer)

        result = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.CALL_FAILED
        assert result.error == "Campaign not accepted"
        log = CallLogRepository(db_session).get_for_day(RentalRef(id=rental.id), TODAY)
        assert log.error_message == "Campaign not accepted"

    def test_lost_claim_race_is_already_called(self, db_session, service, yemot, customer):
        rental = create_rental(db_session, customer)
        CallLogRepository(db_session).claim(
            RentalRef(id=rental.id),
            customer_id=customer.id,
            customer_phone="0501234567",
            call_date=TODAY,
            call_message="msg",
        )

        with patch.object(service.call_repo, "get_for_day", return_value=None):
            result = service.process_rental(rental, TODAY)

        assert result.status == RentalOutcome.ALREADY_CALLED
        yemot.run_campaign.assert_not_called()
