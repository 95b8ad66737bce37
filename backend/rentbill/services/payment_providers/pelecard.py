"""Pelecard card gateway adapter.

Pelecard charges either a raw card or a previously issued token through a
single ``DebitRegularType`` JSON endpoint. The response carries a
``StatusCode`` field, where ``"000"`` is the only success value, and an
optional ``ResultData`` object with a renewed token and masked card data.
Everything else in the body is stored verbatim and never interpreted.
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import httpx

from rentbill.core.config import settings

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODE = "000"

# Pelecard numeric currency codes
CURRENCY_CODES = {
    "ILS": "1",
    "USD": "2",
    "EUR": "978",
}

SENSITIVE_FIELDS = {
    "creditCard": "****",
    "cvv2": "***",
    "password": "****",
    "token": "****",
}

_NUMERIC_CUSTOMER_ID = re.compile(r"^\d{5,10}$")


class GatewayError(RuntimeError):
    """The gateway could not be reached or did not answer."""


@dataclass
class CardDetails:
    """Raw card data for a one-off charge. Never persisted or logged."""

    number: str
    expiry: str  # MMYY
    cvv: str

    def __repr__(self) -> str:
        return f"CardDetails(number='****{self.number[-4:]}', expiry='{self.expiry}', cvv='***')"


@dataclass
class GatewayResult:
    """Classified gateway answer."""

    success: bool
    gateway_transaction_id: str | None = None
    renewed_token: str | None = None
    card_last4: str | None = None
    card_expiry: str | None = None
    error_message: str | None = None
    error_code: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


def mask_sensitive(payload: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``payload`` with card, CVV, password and token values masked."""
    masked = dict(payload)
    for key, mask in SENSITIVE_FIELDS.items():
        if masked.get(key):
            masked[key] = mask
    return masked


def coerce_customer_identifier(value: str | None) -> str:
    """Pelecard only accepts a 5-10 digit merchant-side id; anything else is sent empty."""
    if isinstance(value, str) and _NUMERIC_CUSTOMER_ID.match(value):
        return value
    return ""


def to_minor_units(amount: Decimal) -> str:
    return str(int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


class PelecardGateway:
    """Narrow adapter over Pelecard's regular debit call."""

    def __init__(
        self,
        terminal: str | None = None,
        user: str | None = None,
        password: str | None = None,
        url: str | None = None,
        shop_number: str | None = None,
        timeout: float | None = None,
    ):
        self.terminal = terminal or settings.pelecard_terminal
        self.user = user or settings.pelecard_user
        self.password = password or settings.pelecard_password
        self.url = url or settings.pelecard_url
        self.shop_number = shop_number or settings.pelecard_shop_number
        self.timeout = timeout if timeout is not None else settings.pelecard_timeout

    def build_payload(
        self,
        amount: Decimal,
        description: str,
        currency: str | None = None,
        customer_identifier: str | None = None,
        token: str | None = None,
        card: CardDetails | None = None,
    ) -> dict[str, Any]:
        if not token and card is None:
            raise ValueError("Either a token or card details are required")

        currency = (currency or settings.DEFAULT_CURRENCY).upper()
        currency_code = CURRENCY_CODES.get(currency)
        if currency_code is None:
            raise ValueError(f"Unsupported currency: {currency}")

        payload: dict[str, Any] = {
            "terminalNumber": self.terminal,
            "user": self.user,
            "password": self.password,
            "shopNumber": self.shop_number,
            "total": to_minor_units(amount),
            "currency": currency_code,
            "id": coerce_customer_identifier(customer_identifier),
            "authorizationNumber": "",
            "paramX": description,
        }
        if token:
            payload.update(token=token, creditCard="", creditCardDateMmYy="", cvv2="")
        else:
            assert card is not None
            payload.update(
                token="",
                creditCard=re.sub(r"\s", "", card.number),
                creditCardDateMmYy=card.expiry,
                cvv2=card.cvv,
            )
        return payload

    def charge(
        self,
        amount: Decimal,
        description: str,
        currency: str | None = None,
        customer_identifier: str | None = None,
        token: str | None = None,
        card: CardDetails | None = None,
    ) -> GatewayResult:
        """Debit the card or token once.

        Raises:
            GatewayError: on transport failure or timeout.
        """
        payload = self.build_payload(
            amount,
            description,
            currency=currency,
            customer_identifier=customer_identifier,
            token=token,
            card=card,
        )
        logger.info("Pelecard debit request: %s", mask_sensitive(payload))

        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise GatewayError(f"Pelecard request failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {"raw": resp.text[:2000]}

        result = self.parse_response(data, card)
        logger.info(
            "Pelecard debit response: http=%d status_code=%s",
            resp.status_code,
            result.error_code or SUCCESS_STATUS_CODE,
        )
        return result

    def parse_response(self, data: dict[str, Any], card: CardDetails | None = None) -> GatewayResult:
        status_code = data.get("StatusCode")
        if status_code is not None:
            status_code = str(status_code)

        if status_code != SUCCESS_STATUS_CODE:
            return GatewayResult(
                success=False,
                error_message=data.get("ErrorMessage") or "Payment failed",
                error_code=status_code,
                raw=data,
            )

        result_data = data.get("ResultData")
        if not isinstance(result_data, dict):
            result_data = data

        card_number = result_data.get("CreditCardNumber")
        if card_number:
            last4 = str(card_number)[-4:]
        elif card is not None:
            last4 = re.sub(r"\s", "", card.number)[-4:]
        else:
            last4 = None

        gateway_txn = data.get("PelecardTransactionId") or result_data.get(
            "PelecardTransactionId"
        )
        return GatewayResult(
            success=True,
            gateway_transaction_id=str(gateway_txn) if gateway_txn else None,
            renewed_token=result_data.get("Token") or data.get("Token") or None,
            card_last4=last4,
            card_expiry=result_data.get("CreditCardExpDate") or (card.expiry if card else None),
            raw=data,
        )
