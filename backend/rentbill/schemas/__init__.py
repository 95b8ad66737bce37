from rentbill.schemas.call_log import CallLogResponse
from rentbill.schemas.invoice import InvoiceResponse
from rentbill.schemas.overdue import (
    BatchSummaryResponse,
    OverdueChargeResponse,
    RentalResultResponse,
)
from rentbill.schemas.payment_transaction import (
    ChargeRequest,
    ChargeResponse,
    PaymentTransactionResponse,
)

__all__ = [
    "BatchSummaryResponse",
    "CallLogResponse",
    "ChargeRequest",
    "ChargeResponse",
    "InvoiceResponse",
    "OverdueChargeResponse",
    "PaymentTransactionResponse",
    "RentalResultResponse",
]
