"""Idempotent card charging on top of the Pelecard gateway."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from rentbill.core.config import require_gateway_credentials, settings
from rentbill.models.payment_transaction import PaymentTransaction, TransactionStatus
from rentbill.repositories.customer_repository import CustomerRepository
from rentbill.repositories.invoice_repository import InvoiceRepository
from rentbill.repositories.payment_transaction_repository import PaymentTransactionRepository
from rentbill.services.invoice_service import InvoiceService
from rentbill.services.messages import render
from rentbill.services.payment_providers.pelecard import (
    CURRENCY_CODES,
    CardDetails,
    GatewayError,
    PelecardGateway,
)

logger = logging.getLogger(__name__)


@dataclass
class ChargeOutcome:
    """Result of a charge attempt, fresh or replayed from storage."""

    success: bool
    transaction_id: str
    gateway_transaction_id: str | None = None
    error_message: str | None = None
    error_code: str | None = None
    invoice_number: int | None = None
    replayed: bool = False


class PaymentService:
    """Charges a card or stored token exactly once per ``transaction_id``.

    The flow for a new id is: insert a ``pending`` transaction row, call the
    gateway, then move the row to ``success`` or ``failed``. A row left in
    ``pending`` means the process died mid-call; it is replayed as an
    inconclusive failure and never sent to the gateway again.
    """

    def __init__(
        self,
        db: Session,
        gateway: PelecardGateway | None = None,
        invoice_service: InvoiceService | None = None,
    ):
        self.db = db
        self.gateway = gateway or PelecardGateway()
        self.invoice_service = invoice_service or InvoiceService(db)
        self.txn_repo = PaymentTransactionRepository(db)
        self.customer_repo = CustomerRepository(db)

    def charge(
        self,
        transaction_id: str,
        amount: Decimal,
        customer_name: str,
        currency: str | None = None,
        customer_id: UUID | None = None,
        customer_identifier: str | None = None,
        rental_id: UUID | None = None,
        description: str | None = None,
        token: str | None = None,
        card: CardDetails | None = None,
        use_stored_token: bool = False,
    ) -> ChargeOutcome:
        """Charge ``amount`` once for ``transaction_id``.

        Args:
            transaction_id: Caller-supplied idempotency key.
            amount: Amount in major units.
            customer_name: Name printed on the invoice.
            currency: ISO currency, defaults to the shop currency.
            customer_id: Internal customer id; receives a renewed token.
            customer_identifier: Merchant-side numeric id forwarded to the gateway.
            rental_id: Rental the charge belongs to, if any.
            description: Free text shown on the card statement and invoice.
            token: Stored gateway token to charge.
            card: Raw card details, used when no token is given.
            use_stored_token: Look the token up on ``customer_id``.

        Raises:
            ValueError: invalid amount, unsupported currency or missing credential.
            ConfigurationError: gateway credentials are not configured.
        """
        if not transaction_id:
            raise ValueError("transaction_id is required for idempotency")
        amount = Decimal(str(amount))
        if amount <= 0:
            raise ValueError("Valid amount is required")

        existing = self.txn_repo.get_by_transaction_id(transaction_id)
        if existing is not None:
            logger.info("Idempotent request, returning stored result for %s", transaction_id)
            return self._replay(existing)

        if use_stored_token and not token:
            if customer_id is None:
                raise ValueError("customer_id is required to use a stored token")
            customer = self.customer_repo.get_by_id(customer_id)
            if customer is None or not customer.payment_token:
                raise ValueError("No payment token found for customer")
            token = str(customer.payment_token)

        if not token and card is None:
            raise ValueError("Either a token or card details are required")

        currency = (currency or settings.DEFAULT_CURRENCY).upper()
        if currency not in CURRENCY_CODES:
            raise ValueError(f"Unsupported currency: {currency}")

        require_gateway_credentials()

        description = description or render("payment_description", customer_name=customer_name)

        txn = self.txn_repo.create_pending(
            transaction_id=transaction_id,
            amount=amount,
            currency=currency,
            rental_id=rental_id,
            customer_id=customer_id,
            customer_name=customer_name,
        )
        if txn is None:
            # Lost the insert race to a concurrent attempt with the same id
            existing = self.txn_repo.get_by_transaction_id(transaction_id)
            assert existing is not None
            return self._replay(existing)

        try:
            result = self.gateway.charge(
                amount,
                description,
                currency=currency,
                customer_identifier=customer_identifier,
                token=token,
                card=card,
            )
        except GatewayError as exc:
            logger.warning("Gateway error for transaction %s: %s", transaction_id, exc)
            self.txn_repo.mark_failed(txn, str(exc))
            return ChargeOutcome(
                success=False, transaction_id=transaction_id, error_message=str(exc)
            )

        if not result.success:
            error_message = result.error_message or "Payment failed"
            self.txn_repo.mark_failed(
                txn, error_message, error_code=result.error_code, gateway_response=result.raw
            )
            logger.info(
                "Transaction %s declined (code %s): %s",
                transaction_id,
                result.error_code,
                error_message,
            )
            return ChargeOutcome(
                success=False,
                transaction_id=transaction_id,
                error_message=error_message,
                error_code=result.error_code,
            )

        self.txn_repo.mark_success(txn, result.gateway_transaction_id, result.raw)
        logger.info("Transaction %s succeeded", transaction_id)

        if result.renewed_token and customer_id is not None:
            self.customer_repo.update_payment_token(
                customer_id,
                result.renewed_token,
                last4=result.card_last4,
                expiry=result.card_expiry,
            )

        invoice = self.invoice_service.issue_for_transaction(
            transaction_id=transaction_id,
            customer_name=customer_name,
            amount=amount,
            currency=currency,
            rental_id=rental_id,
            customer_id=customer_id,
            description=description,
        )

        return ChargeOutcome(
            success=True,
            transaction_id=transaction_id,
            gateway_transaction_id=result.gateway_transaction_id,
            invoice_number=int(invoice.invoice_number) if invoice else None,
        )

    def _replay(self, txn: PaymentTransaction) -> ChargeOutcome:
        transaction_id = str(txn.transaction_id)
        if txn.status == TransactionStatus.SUCCESS.value:
            invoice = InvoiceRepository(self.db).get_by_transaction_id(transaction_id)
            return ChargeOutcome(
                success=True,
                transaction_id=transaction_id,
                gateway_transaction_id=txn.gateway_transaction_id,  # type: ignore[arg-type]
                invoice_number=int(invoice.invoice_number) if invoice else None,
                replayed=True,
            )
        if txn.status == TransactionStatus.FAILED.value:
            return ChargeOutcome(
                success=False,
                transaction_id=transaction_id,
                error_message=txn.error_message or "Transaction previously failed",  # type: ignore[arg-type]
                error_code=txn.error_code,  # type: ignore[arg-type]
                replayed=True,
            )
        return ChargeOutcome(
            success=False,
            transaction_id=transaction_id,
            error_message="Transaction is pending reconciliation",
            replayed=True,
        )
