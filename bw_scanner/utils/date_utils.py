"""Date utility functions."""

from datetime import date, datetime, timedelta
from typing import Optional

import pytz

from ..constants import RUN_DATE_TIMEZONE


def utc_today(now: Optional[datetime] = None) -> date:
    """
    Today's date in UTC.

    History windows and expiration distances are measured from the UTC
    date so a scan gives the same answer wherever it is run.

    Args:
        now: Optional datetime (defaults to current time). Naive values are
            taken to be UTC.
    """
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(pytz.utc).date()


def lookback_window(days: int, today: date) -> tuple[date, date]:
    """
    Calendar window ending today.

    Example: lookback_window(84, date(2026, 10, 18)) covers
    2026-07-26 through 2026-10-18.

    Returns:
        (start, end) dates, both inclusive
    """
    return today - timedelta(days=days), today


def days_until(expiration: date, today: date) -> int:
    """Calendar days from today to expiration (negative if already past)."""
    return (expiration - today).days


def format_run_date(
    now: Optional[datetime] = None, timezone: str = RUN_DATE_TIMEZONE
) -> str:
    """
    Stamp a run in Pacific time, e.g. "10/18/2026, 1:35:07 PM PT".

    Args:
        now: Optional datetime (defaults to current time). Naive values are
            taken to be UTC.
        timezone: IANA timezone name
    """
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)

    local = now.astimezone(pytz.timezone(timezone))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem} PT"
    )
