from rentbill.repositories.call_log_repository import CallLogRepository
from rentbill.repositories.customer_repository import CustomerRepository
from rentbill.repositories.invoice_repository import InvoiceRepository
from rentbill.repositories.overdue_charge_repository import OverdueChargeRepository
from rentbill.repositories.payment_transaction_repository import PaymentTransactionRepository
from rentbill.repositories.rental_repository import RentalRepository

__all__ = [
    "CallLogRepository",
    "CustomerRepository",
    "InvoiceRepository",
    "OverdueChargeRepository",
    "PaymentTransactionRepository",
    "RentalRepository",
]
