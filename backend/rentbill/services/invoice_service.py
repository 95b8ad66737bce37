"""Invoice issuance for successful charges."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rentbill.core.config import settings
from rentbill.models.invoice import Invoice
from rentbill.repositories.invoice_repository import InvoiceRepository

logger = logging.getLogger(__name__)

# A concurrent run can take the number we computed; one retry reads the new max
ISSUE_ATTEMPTS = 2


class InvoiceService:
    def __init__(self, db: Session):
        self.db = db
        self.invoice_repo = InvoiceRepository(db)

    def issue_for_transaction(
        self,
        transaction_id: str,
        customer_name: str,
        amount: Decimal,
        currency: str,
        rental_id: UUID | None = None,
        customer_id: UUID | None = None,
        description: str | None = None,
    ) -> Invoice | None:
        """Issue the invoice for a successful charge.

        Best-effort: the money has already moved, so a failure here is
        logged and never propagated to the charge.
        """
        existing = self.invoice_repo.get_by_transaction_id(transaction_id)
        if existing is not None:
            return existing

        for attempt in range(1, ISSUE_ATTEMPTS + 1):
            try:
                invoice = self.invoice_repo.create(
                    customer_name=customer_name,
                    amount=amount,
                    currency=currency,
                    business_name=settings.business_name,
                    business_id=settings.business_id,
                    transaction_id=transaction_id,
                    rental_id=rental_id,
                    customer_id=customer_id,
                    description=description,
                )
            except IntegrityError:
                self.db.rollback()
                existing = self.invoice_repo.get_by_transaction_id(transaction_id)
                if existing is not None:
                    return existing
                logger.warning(
                    "Invoice number taken for transaction %s (attempt %d/%d)",
                    transaction_id,
                    attempt,
                    ISSUE_ATTEMPTS,
                )
                continue
            except Exception:
                self.db.rollback()
                logger.exception("Failed to issue invoice for transaction %s", transaction_id)
                return None
            logger.info(
                "Issued invoice %d for transaction %s", invoice.invoice_number, transaction_id
            )
            return invoice

        logger.error("Failed to issue invoice for transaction %s", transaction_id)
        return None
