"""Automatic reminder calls for overdue rentals."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from rentbill.models.call_log import CallType, RentalRef
from rentbill.models.rental import Rental
from rentbill.repositories.call_log_repository import CallLogRepository
from rentbill.repositories.customer_repository import CustomerRepository
from rentbill.services.messages import render
from rentbill.services.overdue_results import RentalOutcome, RentalResult
from rentbill.services.telephony.yemot import TelephonyError, YemotClient, clean_phone

logger = logging.getLogger(__name__)


class OverdueCallService:
    """Places at most one automatic reminder call per rental per day.

    Only rentals holding a SIM card are called. The day's call row is
    written before dialing, so a failed or unparsable campaign response
    still counts as "attempted today".
    """

    def __init__(self, db: Session, client: YemotClient | None = None):
        self.db = db
        self.client = client or YemotClient()
        self.call_repo = CallLogRepository(db)
        self.customer_repo = CustomerRepository(db)

    def process_rental(self, rental: Rental, today: date) -> RentalResult:
        rental_id: UUID = rental.id  # type: ignore[assignment]

        if not rental.has_sim:
            return RentalResult(rental_id=rental_id, status=RentalOutcome.NO_SIM)

        entity = RentalRef(id=rental_id)
        if self.call_repo.get_for_day(entity, today, CallType.AUTOMATIC) is not None:
            return RentalResult(rental_id=rental_id, status=RentalOutcome.ALREADY_CALLED)

        customer = None
        if rental.customer_id is not None:
            customer = self.customer_repo.get_by_id(rental.customer_id)  # type: ignore[arg-type]
        phone = clean_phone(customer.phone if customer is not None else None)  # type: ignore[arg-type]
        if not phone:
            return RentalResult(
                rental_id=rental_id, status=RentalOutcome.CALL_FAILED, error="No phone number"
            )

        message = render("overdue_reminder", customer_name=rental.customer_name)
        log = self.call_repo.claim(
            entity,
            customer_id=rental.customer_id,  # type: ignore[arg-type]
            customer_phone=phone,
            call_date=today,
            call_message=message,
            call_type=CallType.AUTOMATIC,
        )
        if log is None:
            return RentalResult(rental_id=rental_id, status=RentalOutcome.ALREADY_CALLED)

        try:
            result = self.client.run_campaign([phone], message)
        except TelephonyError as exc:
            logger.warning("Reminder call for rental %s failed: %s", rental_id, exc)
            self.call_repo.record_campaign(log, None, error_message=str(exc))
            return RentalResult(
                rental_id=rental_id, status=RentalOutcome.CALL_FAILED, error=str(exc)
            )

        if not result.accepted:
            error = "Campaign not accepted"
            self.call_repo.record_campaign(log, result.campaign_id, error_message=error)
            return RentalResult(rental_id=rental_id, status=RentalOutcome.CALL_FAILED, error=error)

        self.call_repo.record_campaign(log, result.campaign_id)
        logger.info("Reminder call placed for rental %s (campaign %s)", rental_id, result.campaign_id)
        return RentalResult(rental_id=rental_id, status=RentalOutcome.CALLED)
