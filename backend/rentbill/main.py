import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentbill.core.clock import local_today
from rentbill.core.config import settings
from rentbill.routers import call_logs, invoices, overdue, payments

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

OPENAPI_TAGS = [
    {"name": "Overdue", "description": "Run the daily overdue batch and inspect its records."},
    {"name": "Payments", "description": "Charge cards and stored tokens idempotently."},
    {"name": "Invoices", "description": "Invoices issued for successful charges."},
    {"name": "Call Logs", "description": "Reminder calls placed through the telephony API."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Overdue rental settlement: daily overdue charges against stored card "
        "tokens, reminder calls, and invoice issuance."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(overdue.router, prefix="/v1/overdue", tags=["Overdue"])
app.include_router(payments.router, prefix="/v1/payments", tags=["Payments"])
app.include_router(invoices.router, prefix="/v1/invoices", tags=["Invoices"])
app.include_router(call_logs.router, prefix="/v1/call_logs", tags=["Call Logs"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
        "gateway": "configured" if settings.gateway_configured else "missing credentials",
        "telephony": "configured" if settings.telephony_configured else "missing credentials",
        "local_date": local_today().isoformat(),
    }
