from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rentbill.models.overdue_charge import OverdueCharge, OverdueChargeStatus


class OverdueChargeRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        charge_date: date | None = None,
        rental_id: UUID | None = None,
        status: OverdueChargeStatus | None = None,
    ) -> list[OverdueCharge]:
        query = self.db.query(OverdueCharge)
        if charge_date:
            query = query.filter(OverdueCharge.charge_date == charge_date)
        if rental_id:
            query = query.filter(OverdueCharge.rental_id == rental_id)
        if status:
            query = query.filter(OverdueCharge.status == status.value)
        return query.order_by(OverdueCharge.created_at.desc()).offset(skip).limit(limit).all()

    def get_for_day(self, rental_id: UUID, charge_date: date) -> OverdueCharge | None:
        return (
            self.db.query(OverdueCharge)
            .filter(
                OverdueCharge.rental_id == rental_id,
                OverdueCharge.charge_date == charge_date,
            )
            .first()
        )

    def claim(
        self,
        rental_id: UUID,
        customer_id: UUID | None,
        charge_date: date,
        days_overdue: int,
        amount: Decimal,
        currency: str,
        error_message: str | None = None,
    ) -> OverdueCharge | None:
        """Insert the day's pending row for a rental.

        Returns None if a row for (rental, day) already exists, which is how
        a concurrent or repeated batch learns it lost the race.
        """
        charge = OverdueCharge(
            rental_id=rental_id,
            customer_id=customer_id,
            charge_date=charge_date,
            days_overdue=days_overdue,
            amount=amount,
            currency=currency,
            status=OverdueChargeStatus.PENDING.value,
            error_message=error_message,
        )
        self.db.add(charge)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(charge)
        return charge

    def mark_charged(self, charge: OverdueCharge, transaction_id: str) -> OverdueCharge:
        charge.status = OverdueChargeStatus.CHARGED.value  # type: ignore[assignment]
        charge.transaction_id = transaction_id  # type: ignore[assignment]
        charge.error_message = None  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(charge)
        return charge

    def mark_failed(
        self, charge: OverdueCharge, error_message: str, transaction_id: str | None = None
    ) -> OverdueCharge:
        charge.status = OverdueChargeStatus.FAILED.value  # type: ignore[assignment]
        charge.error_message = error_message  # type: ignore[assignment]
        charge.transaction_id = transaction_id  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(charge)
        return charge
