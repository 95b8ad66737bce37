from uuid import UUID

from sqlalchemy.orm import Session

from rentbill.models.customer import Customer
from rentbill.models.shared import utc_now


class CustomerRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, customer_id: UUID) -> Customer | None:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def update_payment_token(
        self,
        customer_id: UUID,
        token: str,
        last4: str | None,
        expiry: str | None,
    ) -> Customer | None:
        """Store a renewed gateway token on the customer.

        Tokens are only ever replaced, never cleared.
        """
        customer = self.get_by_id(customer_id)
        if not customer:
            return None
        customer.payment_token = token  # type: ignore[assignment]
        customer.payment_token_last4 = last4  # type: ignore[assignment]
        customer.payment_token_expiry = expiry  # type: ignore[assignment]
        customer.payment_token_updated_at = utc_now()  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(customer)
        return customer
