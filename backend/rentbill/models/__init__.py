from rentbill.models.call_log import (
    CallLog,
    CallStatus,
    CallType,
    EntityRef,
    RentalRef,
    RepairRef,
)
from rentbill.models.customer import Customer
from rentbill.models.invoice import Invoice, InvoiceStatus
from rentbill.models.overdue_charge import OverdueCharge, OverdueChargeStatus
from rentbill.models.payment_transaction import PaymentTransaction, TransactionStatus
from rentbill.models.rental import ItemCategory, Rental, RentalItem, RentalStatus

__all__ = [
    "CallLog",
    "CallStatus",
    "CallType",
    "Customer",
    "EntityRef",
    "Invoice",
    "InvoiceStatus",
    "ItemCategory",
    "OverdueCharge",
    "OverdueChargeStatus",
    "PaymentTransaction",
    "Rental",
    "RentalItem",
    "RentalRef",
    "RentalStatus",
    "RepairRef",
    "TransactionStatus",
]
