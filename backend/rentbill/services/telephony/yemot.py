"""Yemot HaMashiach telephony campaign client."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from rentbill.core.config import settings

logger = logging.getLogger(__name__)


class TelephonyError(RuntimeError):
    """The campaign API could not be reached."""


@dataclass
class CampaignResult:
    accepted: bool
    campaign_id: str | None = None
    body: dict[str, Any] = field(default_factory=dict)


def clean_phone(phone: str | None) -> str:
    """Keep only the digits of a phone number."""
    return "".join(ch for ch in (phone or "") if ch.isdigit())


def parse_campaign_response(text: str) -> CampaignResult:
    """Parse a RunCampaign body.

    The API usually answers JSON but is not guaranteed to; a non-JSON body is
    kept as ``{"raw": text}`` and counts as not accepted.
    """
    try:
        body = json.loads(text)
    except ValueError:
        logger.warning("Unparsable Yemot response: %s", text[:200])
        return CampaignResult(accepted=False, body={"raw": text})
    if not isinstance(body, dict):
        return CampaignResult(accepted=False, body={"raw": text})

    campaign_id = body.get("campaignId") or body.get("campaign_id")
    accepted = body.get("responseStatus") == "OK" or body.get("success") is True
    return CampaignResult(
        accepted=accepted,
        campaign_id=str(campaign_id) if campaign_id else None,
        body=body,
    )


class YemotClient:
    def __init__(
        self,
        system_number: str | None = None,
        password: str | None = None,
        url: str | None = None,
        template_id: str | None = None,
        timeout: float | None = None,
    ):
        self.system_number = system_number or settings.yemot_system_number
        self.password = password or settings.yemot_password
        self.url = url or settings.yemot_url
        self.template_id = template_id or settings.yemot_template_id
        self.timeout = timeout if timeout is not None else settings.yemot_timeout

    def run_campaign(self, phones: list[str], message: str) -> CampaignResult:
        """Start a text-to-speech call campaign to ``phones``.

        Raises:
            TelephonyError: on transport failure or timeout.
        """
        params = {
            "token": f"{self.system_number}:{self.password}",
            "phones": ":".join(phones),
            "tts": message,
            "templateId": self.template_id,
        }
        logger.info("Starting Yemot campaign for %d phone(s)", len(phones))
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.get(self.url, params=params)
        except httpx.HTTPError as exc:
            raise TelephonyError(f"Yemot request failed: {exc}") from exc

        result = parse_campaign_response(resp.text)
        logger.info(
            "Yemot campaign response: http=%d accepted=%s campaign_id=%s",
            resp.status_code,
            result.accepted,
            result.campaign_id,
        )
        return result
