"""Calendar gate: decides whether today is a non-processing day."""

import logging
from datetime import date
from typing import Any

import httpx

from rentbill.core.clock import local_today
from rentbill.core.config import settings

logger = logging.getLogger(__name__)


class CalendarGate:
    """Skips the weekly rest day and days Hebcal flags as holidays.

    The Hebcal lookup fails open: if the service is down or answers with
    garbage, the day is treated as a working day so billing never stalls on
    a calendar outage.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        rest_weekday: int | None = None,
    ):
        self.url = url or settings.hebcal_url
        self.timeout = timeout if timeout is not None else settings.hebcal_timeout
        self.rest_weekday = rest_weekday if rest_weekday is not None else settings.REST_WEEKDAY

    def should_skip_today(self, today: date | None = None) -> bool:
        day = today or local_today()
        if day.weekday() == self.rest_weekday:
            logger.info("%s is the weekly rest day, skipping processing", day.isoformat())
            return True
        if self.is_holiday(day):
            logger.info("%s is a holiday, skipping processing", day.isoformat())
            return True
        return False

    def is_holiday(self, day: date) -> bool:
        day_str = day.isoformat()
        params = {
            "v": "1",
            "cfg": "json",
            "maj": "on",
            "min": "off",
            "mod": "off",
            "start": day_str,
            "end": day_str,
            "geo": "none",
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.get(self.url, params=params)
            if not 200 <= resp.status_code < 300:
                logger.warning(
                    "Hebcal returned HTTP %d, proceeding with processing", resp.status_code
                )
                return False
            data: Any = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Hebcal check failed, proceeding with processing: %s", exc)
            return False

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return False
        return any(
            isinstance(item, dict)
            and (item.get("yomtov") is True or item.get("category") == "holiday")
            for item in items
        )
