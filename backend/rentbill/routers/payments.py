"""Payment API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from rentbill.core.config import ConfigurationError
from rentbill.core.database import get_db
from rentbill.models.payment_transaction import PaymentTransaction
from rentbill.repositories.payment_transaction_repository import PaymentTransactionRepository
from rentbill.schemas.payment_transaction import (
    ChargeRequest,
    ChargeResponse,
    PaymentTransactionResponse,
)
from rentbill.services.payment_providers.pelecard import CardDetails
from rentbill.services.payment_service import PaymentService

router = APIRouter()


@router.post("/charge", response_model=ChargeResponse)
async def charge(
    data: ChargeRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> ChargeResponse:
    """Charge a card or stored token.

    Idempotent on ``transaction_id``: repeating a request returns the stored
    outcome without contacting the gateway again. Declines answer 402.
    """
    card = None
    if data.card_number and data.card_expiry and data.cvv:
        card = CardDetails(number=data.card_number, expiry=data.card_expiry, cvv=data.cvv)

    service = PaymentService(db)
    try:
        outcome = service.charge(
            transaction_id=data.transaction_id,
            amount=data.amount,
            customer_name=data.customer_name,
            currency=data.currency,
            customer_id=data.customer_id,
            customer_identifier=data.customer_identifier,
            rental_id=data.rental_id,
            description=data.description,
            token=data.token,
            card=card,
            use_stored_token=data.use_stored_token,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None

    if not outcome.success:
        response.status_code = 402
    return ChargeResponse(
        success=outcome.success,
        transaction_id=outcome.transaction_id,
        gateway_transaction_id=outcome.gateway_transaction_id,
        invoice_number=outcome.invoice_number,
        error=outcome.error_message,
        error_code=outcome.error_code,
        replayed=outcome.replayed,
    )


@router.get("/transactions/{transaction_id}", response_model=PaymentTransactionResponse)
async def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
) -> PaymentTransaction:
    """Get a payment transaction by its idempotency id."""
    repo = PaymentTransactionRepository(db)
    txn = repo.get_by_transaction_id(transaction_id)
    if not txn:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return txn
