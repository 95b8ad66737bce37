"""Overdue day counting.

Overdue accrues on every calendar day, rest days and holidays included:
the customer still holds the equipment on those days.
"""

from datetime import date, datetime


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_overdue(end_date: date | datetime, today: date | datetime) -> int:
    """Whole calendar days between the rental's end date and today."""
    return (_as_date(today) - _as_date(end_date)).days


def effective_days_overdue(
    end_date: date | datetime,
    today: date | datetime,
    grace_days: int | None = None,
) -> int:
    """Chargeable overdue days once the grace window is taken off.

    A result of zero or less means the rental is still inside its grace
    window.
    """
    return days_overdue(end_date, today) - max(grace_days or 0, 0)
