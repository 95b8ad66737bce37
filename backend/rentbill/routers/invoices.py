"""Invoice API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from rentbill.core.database import get_db
from rentbill.models.invoice import Invoice
from rentbill.repositories.invoice_repository import InvoiceRepository
from rentbill.schemas.invoice import InvoiceResponse

router = APIRouter()


@router.get("/", response_model=list[InvoiceResponse])
async def list_invoices(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[Invoice]:
    """List issued invoices, newest first."""
    repo = InvoiceRepository(db)
    return repo.get_all(skip=skip, limit=limit)


@router.get("/{invoice_number}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_number: int,
    db: Session = Depends(get_db),
) -> Invoice:
    """Get an invoice by its sequential number."""
    repo = InvoiceRepository(db)
    invoice = repo.get_by_invoice_number(invoice_number)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice
