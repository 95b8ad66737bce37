from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from rentbill.models.rental import Rental, RentalStatus


class RentalRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, rental_id: UUID) -> Rental | None:
        return self.db.query(Rental).filter(Rental.id == rental_id).first()

    def get_overdue_chargeable(self, today: date) -> list[Rental]:
        """Active rentals past their end date that carry a positive daily overdue rate."""
        return (
            self.db.query(Rental)
            .filter(
                Rental.status == RentalStatus.ACTIVE.value,
                Rental.overdue_daily_rate.isnot(None),
                Rental.overdue_daily_rate > 0,
                Rental.end_date < today,
            )
            .order_by(Rental.end_date.asc())
            .all()
        )

    def get_overdue_active(self, today: date) -> list[Rental]:
        """Active rentals past their end date, regardless of overdue pricing."""
        return (
            self.db.query(Rental)
            .filter(
                Rental.status == RentalStatus.ACTIVE.value,
                Rental.end_date < today,
            )
            .order_by(Rental.end_date.asc())
            .all()
        )
