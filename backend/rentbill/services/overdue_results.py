"""Per-rental outcomes of the overdue batch."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from uuid import UUID


class RentalOutcome(str, Enum):
    # Charges
    GRACE_PERIOD = "grace_period"
    ALREADY_PROCESSED = "already_processed"
    PENDING = "pending"
    CHARGED = "charged"
    FAILED = "failed"
    # Calls
    NO_SIM = "no_sim"
    ALREADY_CALLED = "already_called"
    CALLED = "called"
    CALL_FAILED = "call_failed"
    # Either
    ERROR = "error"


class ResultStep(str, Enum):
    CHARGE = "charge"
    CALL = "call"


UNSUCCESSFUL_OUTCOMES = frozenset(
    {RentalOutcome.FAILED, RentalOutcome.CALL_FAILED, RentalOutcome.ERROR}
)


@dataclass
class RentalResult:
    rental_id: UUID
    status: RentalOutcome
    amount: Decimal | None = None
    error: str | None = None
    # Which batch step produced the result; a rental appears once per step in "all" mode
    step: ResultStep | None = None

    @property
    def successful(self) -> bool:
        return self.status not in UNSUCCESSFUL_OUTCOMES
