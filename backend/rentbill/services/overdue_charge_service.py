"""Daily overdue charging for a single rental."""

import logging
import time
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from rentbill.models.rental import Rental
from rentbill.repositories.customer_repository import CustomerRepository
from rentbill.repositories.overdue_charge_repository import OverdueChargeRepository
from rentbill.services.messages import render
from rentbill.services.overdue_days import effective_days_overdue
from rentbill.services.overdue_results import RentalOutcome, RentalResult
from rentbill.services.payment_service import PaymentService

logger = logging.getLogger(__name__)

NO_TOKEN_REASON = "No payment token"
AUTO_CHARGE_DISABLED_REASON = "Auto-charge disabled"


def build_transaction_id(rental_id: UUID, today: date) -> str:
    """Unique per attempt; same-day idempotency comes from the charge row, not this key."""
    return f"overdue-{rental_id}-{today.isoformat()}-{time.time_ns()}"


class OverdueChargeService:
    """Charges one day of the overdue rate for a rental, at most once per day.

    Per rental and day the outcome is one of ``grace_period``,
    ``already_processed``, ``pending`` (no token or auto-charge off),
    ``charged`` or ``failed``. The day's ``overdue_charges`` row is claimed
    before the gateway is called, so a concurrent run loses the unique
    constraint and reports ``already_processed`` instead of charging again.
    """

    def __init__(self, db: Session, payment_service: PaymentService | None = None):
        self.db = db
        self.charge_repo = OverdueChargeRepository(db)
        self.customer_repo = CustomerRepository(db)
        self.payment_service = payment_service or PaymentService(db)

    def process_rental(self, rental: Rental, today: date) -> RentalResult:
        rental_id: UUID = rental.id  # type: ignore[assignment]

        days = effective_days_overdue(rental.end_date, today, rental.overdue_grace_days)  # type: ignore[arg-type]
        if days <= 0:
            return RentalResult(rental_id=rental_id, status=RentalOutcome.GRACE_PERIOD)

        if self.charge_repo.get_for_day(rental_id, today) is not None:
            return RentalResult(rental_id=rental_id, status=RentalOutcome.ALREADY_PROCESSED)

        amount = Decimal(str(rental.overdue_daily_rate))
        currency = str(rental.currency)

        customer = None
        if rental.customer_id is not None:
            customer = self.customer_repo.get_by_id(rental.customer_id)  # type: ignore[arg-type]
        token = customer.payment_token if customer is not None else None

        if not token or not rental.auto_charge_enabled:
            reason = AUTO_CHARGE_DISABLED_REASON if token else NO_TOKEN_REASON
            claimed = self.charge_repo.claim(
                rental_id=rental_id,
                customer_id=rental.customer_id,  # type: ignore[arg-type]
                charge_date=today,
                days_overdue=days,
                amount=amount,
                currency=currency,
                error_message=reason,
            )
            if claimed is None:
                return RentalResult(rental_id=rental_id, status=RentalOutcome.ALREADY_PROCESSED)
            logger.info("Rental %s recorded as pending: %s", rental_id, reason)
            return RentalResult(rental_id=rental_id, status=RentalOutcome.PENDING, amount=amount)

        charge = self.charge_repo.claim(
            rental_id=rental_id,
            customer_id=rental.customer_id,  # type: ignore[arg-type]
            charge_date=today,
            days_overdue=days,
            amount=amount,
            currency=currency,
        )
        if charge is None:
            return RentalResult(rental_id=rental_id, status=RentalOutcome.ALREADY_PROCESSED)

        transaction_id = build_transaction_id(rental_id, today)
        try:
            outcome = self.payment_service.charge(
                transaction_id=transaction_id,
                amount=amount,
                customer_name=str(rental.customer_name),
                currency=currency,
                customer_id=customer.id,  # type: ignore[union-attr]
                rental_id=rental_id,
                description=render("overdue_charge_description", days=days),
                token=str(token),
            )
        except Exception as exc:
            logger.exception("Charge for rental %s raised", rental_id)
            self.db.rollback()
            self.charge_repo.mark_failed(charge, str(exc), transaction_id=transaction_id)
            return RentalResult(
                rental_id=rental_id, status=RentalOutcome.FAILED, amount=amount, error=str(exc)
            )

        if outcome.success:
            self.charge_repo.mark_charged(charge, transaction_id)
            logger.info("Charged rental %s %s %s (day %d)", rental_id, amount, currency, days)
            return RentalResult(rental_id=rental_id, status=RentalOutcome.CHARGED, amount=amount)

        error = outcome.error_message or "Payment failed"
        self.charge_repo.mark_failed(charge, error, transaction_id=transaction_id)
        logger.info("Charge for rental %s failed: %s", rental_id, error)
        return RentalResult(
            rental_id=rental_id, status=RentalOutcome.FAILED, amount=amount, error=error
        )
