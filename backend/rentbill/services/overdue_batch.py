"""Daily overdue settlement batch."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID

from sqlalchemy.orm import Session

from rentbill.core.clock import local_today
from rentbill.core.config import (
    ConfigurationError,
    require_gateway_credentials,
    require_telephony_credentials,
)
from rentbill.models.rental import Rental
from rentbill.repositories.rental_repository import RentalRepository
from rentbill.services.calendar_gate import CalendarGate
from rentbill.services.overdue_call_service import OverdueCallService
from rentbill.services.overdue_charge_service import OverdueChargeService
from rentbill.services.overdue_results import RentalOutcome, RentalResult, ResultStep

logger = logging.getLogger(__name__)


class BatchMode(str, Enum):
    CHARGES = "charges"
    CALLS = "calls"
    ALL = "all"


@dataclass
class BatchSummary:
    success: bool = True
    skipped: bool = False
    processed: int = 0
    successful: int = 0
    charged: int = 0
    results: list[RentalResult] = field(default_factory=list)
    error: str | None = None


class OverdueBatchRunner:
    """Top-level entry point of the daily run.

    Safe to trigger any number of times on the same day: every side effect
    is guarded by a per-day unique row, so repeat runs only report
    ``already_processed`` / ``already_called``.
    """

    def __init__(
        self,
        db: Session,
        calendar_gate: CalendarGate | None = None,
        charge_service: OverdueChargeService | None = None,
        call_service: OverdueCallService | None = None,
    ):
        self.db = db
        self.calendar_gate = calendar_gate or CalendarGate()
        self.rental_repo = RentalRepository(db)
        self._charge_service = charge_service
        self._call_service = call_service

    @property
    def charge_service(self) -> OverdueChargeService:
        if self._charge_service is None:
            self._charge_service = OverdueChargeService(self.db)
        return self._charge_service

    @property
    def call_service(self) -> OverdueCallService:
        if self._call_service is None:
            self._call_service = OverdueCallService(self.db)
        return self._call_service

    def run(self, mode: BatchMode = BatchMode.ALL, today: date | None = None) -> BatchSummary:
        today = today or local_today()

        if self.calendar_gate.should_skip_today(today):
            return BatchSummary(skipped=True)

        run_charges = mode in (BatchMode.CHARGES, BatchMode.ALL)
        run_calls = mode in (BatchMode.CALLS, BatchMode.ALL)

        try:
            if run_charges:
                require_gateway_credentials()
            if run_calls:
                require_telephony_credentials()
        except ConfigurationError as exc:
            logger.error("Overdue batch aborted: %s", exc)
            return BatchSummary(success=False, error=str(exc))

        results: list[RentalResult] = []
        if run_charges:
            rentals = self.rental_repo.get_overdue_chargeable(today)
            logger.info("Processing overdue charges for %s: %d rental(s)", today, len(rentals))
            charge = self.charge_service.process_rental
            results.extend(self._process_all(rentals, today, charge, ResultStep.CHARGE))
        if run_calls:
            rentals = self.rental_repo.get_overdue_active(today)
            logger.info("Processing overdue calls for %s: %d rental(s)", today, len(rentals))
            call = self.call_service.process_rental
            results.extend(self._process_all(rentals, today, call, ResultStep.CALL))

        summary = BatchSummary(
            processed=len(results),
            successful=sum(1 for r in results if r.successful),
            charged=sum(1 for r in results if r.status == RentalOutcome.CHARGED),
            results=results,
        )
        logger.info(
            "Overdue batch done: processed=%d successful=%d charged=%d",
            summary.processed,
            summary.successful,
            summary.charged,
        )
        return summary

    def _process_all(
        self,
        rentals: list[Rental],
        today: date,
        handler: Callable[[Rental, date], RentalResult],
        step: ResultStep,
    ) -> list[RentalResult]:
        results: list[RentalResult] = []
        for rental in rentals:
            rental_id: UUID = rental.id  # type: ignore[assignment]
            try:
                result = handler(rental, today)
            except Exception as exc:
                # One bad rental never stops the rest of the batch
                logger.exception("Overdue processing failed for rental %s", rental_id)
                self.db.rollback()
                result = RentalResult(
                    rental_id=rental_id, status=RentalOutcome.ERROR, error=str(exc)
                )
            result.step = step
            results.append(result)
        return results
