"""PaymentTransaction repository for data access."""

from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rentbill.models.payment_transaction import PaymentTransaction, TransactionStatus


class PaymentTransactionRepository:
    """Repository for PaymentTransaction model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_transaction_id(self, transaction_id: str) -> PaymentTransaction | None:
        return (
            self.db.query(PaymentTransaction)
            .filter(PaymentTransaction.transaction_id == transaction_id)
            .first()
        )

    def create_pending(
        self,
        transaction_id: str,
        amount: Decimal,
        currency: str,
        rental_id: UUID | None = None,
        customer_id: UUID | None = None,
        customer_name: str | None = None,
    ) -> PaymentTransaction | None:
        """Insert the pending row for a new attempt.

        Returns None when another attempt already holds ``transaction_id``.
        """
        txn = PaymentTransaction(
            transaction_id=transaction_id,
            amount=amount,
            currency=currency,
            rental_id=rental_id,
            customer_id=customer_id,
            customer_name=customer_name,
            status=TransactionStatus.PENDING.value,
        )
        self.db.add(txn)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(txn)
        return txn

    def mark_success(
        self,
        txn: PaymentTransaction,
        gateway_transaction_id: str | None,
        gateway_response: dict[str, Any],
    ) -> PaymentTransaction:
        txn.status = TransactionStatus.SUCCESS.value  # type: ignore[assignment]
        txn.gateway_transaction_id = gateway_transaction_id  # type: ignore[assignment]
        txn.gateway_response = gateway_response  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(txn)
        return txn

    def mark_failed(
        self,
        txn: PaymentTransaction,
        error_message: str,
        error_code: str | None = None,
        gateway_response: dict[str, Any] | None = None,
    ) -> PaymentTransaction:
        txn.status = TransactionStatus.FAILED.value  # type: ignore[assignment]
        txn.error_message = error_message  # type: ignore[assignment]
        txn.error_code = error_code  # type: ignore[assignment]
        txn.gateway_response = gateway_response  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(txn)
        return txn
