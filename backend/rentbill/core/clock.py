"""Local calendar helpers.

Every per-day invariant of the settlement pipeline (one charge per rental
per day, one automatic call per rental per day) is keyed on the shop's
local calendar date, not on UTC.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from rentbill.core.config import settings


def local_now() -> datetime:
    """Current wall-clock time in the shop's timezone."""
    return datetime.now(ZoneInfo(settings.LOCAL_TIMEZONE))


def local_today() -> date:
    """Current calendar date in the shop's timezone."""
    return local_now().date()
