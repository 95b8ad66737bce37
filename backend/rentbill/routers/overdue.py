"""Overdue settlement API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rentbill.core.database import get_db
from rentbill.models.overdue_charge import OverdueCharge, OverdueChargeStatus
from rentbill.repositories.overdue_charge_repository import OverdueChargeRepository
from rentbill.schemas.overdue import (
    BatchSummaryResponse,
    OverdueChargeResponse,
    RentalResultResponse,
)
from rentbill.services.overdue_batch import BatchMode, BatchSummary, OverdueBatchRunner
from rentbill.tasks import enqueue_process_overdue

router = APIRouter()


def summary_to_response(summary: BatchSummary) -> BatchSummaryResponse:
    return BatchSummaryResponse(
        success=summary.success,
        skipped=summary.skipped,
        processed=summary.processed,
        successful=summary.successful,
        charged=summary.charged,
        error=summary.error,
        results=[
            RentalResultResponse(
                rental_id=r.rental_id,
                status=r.status.value,
                amount=r.amount,
                error=r.error,
                step=r.step.value if r.step else None,
            )
            for r in summary.results
        ],
    )


@router.post("/run", response_model=BatchSummaryResponse)
async def run_overdue_batch(
    mode: BatchMode = Query(
        default=BatchMode.ALL, alias="type", description="charges, calls or all"
    ),
    db: Session = Depends(get_db),
) -> BatchSummaryResponse:
    """Run the daily overdue batch now.

    Safe to call repeatedly on the same day; rentals already handled today
    are reported as such and not charged or called again.
    """
    runner = OverdueBatchRunner(db)
    return summary_to_response(runner.run(mode))


@router.post(
    "/enqueue",
    status_code=202,
    summary="Enqueue overdue batch",
    description="Queue an extra overdue batch run on the background worker.",
)
async def enqueue_overdue_batch(
    mode: BatchMode = Query(default=BatchMode.ALL, alias="type"),
) -> dict[str, str]:
    job = await enqueue_process_overdue(mode.value)
    return {"job_id": job.job_id}


@router.get("/charges", response_model=list[OverdueChargeResponse])
async def list_overdue_charges(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    charge_date: date | None = None,
    rental_id: UUID | None = None,
    status: OverdueChargeStatus | None = None,
    db: Session = Depends(get_db),
) -> list[OverdueCharge]:
    """List daily overdue charge records."""
    repo = OverdueChargeRepository(db)
    return repo.get_all(
        skip=skip, limit=limit, charge_date=charge_date, rental_id=rental_id, status=status
    )
