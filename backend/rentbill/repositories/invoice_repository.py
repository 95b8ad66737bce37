from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from rentbill.models.invoice import Invoice, InvoiceStatus


class InvoiceRepository:
    def __init__(self, db: Session):
        self.db = db

    def _next_invoice_number(self) -> int:
        """Next number in the shop's single sequential invoice series."""
        current = self.db.query(func.max(Invoice.invoice_number)).scalar()
        return int(current or 0) + 1

    def get_all(self, skip: int = 0, limit: int = 100) -> list[Invoice]:
        return (
            self.db.query(Invoice)
            .order_by(Invoice.invoice_number.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_invoice_number(self, invoice_number: int) -> Invoice | None:
        return self.db.query(Invoice).filter(Invoice.invoice_number == invoice_number).first()

    def get_by_transaction_id(self, transaction_id: str) -> Invoice | None:
        return self.db.query(Invoice).filter(Invoice.transaction_id == transaction_id).first()

    def create(
        self,
        customer_name: str,
        amount: Decimal,
        currency: str,
        business_name: str,
        business_id: str,
        transaction_id: str | None = None,
        rental_id: UUID | None = None,
        customer_id: UUID | None = None,
        description: str | None = None,
    ) -> Invoice:
        invoice = Invoice(
            invoice_number=self._next_invoice_number(),
            customer_name=customer_name,
            amount=amount,
            currency=currency,
            business_name=business_name,
            business_id=business_id,
            transaction_id=transaction_id,
            rental_id=rental_id,
            customer_id=customer_id,
            description=description,
            status=InvoiceStatus.ISSUED.value,
        )
        self.db.add(invoice)
        self.db.commit()
        self.db.refresh(invoice)
        return invoice
