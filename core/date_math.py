"""
Clock and date arithmetic for scheduling.

All scheduling decisions are made on calendar days in the configured
study time zone (STUDY_TIMEZONE). Stored datetimes without an offset are
interpreted in that zone.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from core import config


def now() -> datetime:
    """Current time as an aware datetime in the study time zone."""
    return datetime.now(config.get_timezone())


def to_local(dt: datetime) -> datetime:
    """
    Express a datetime in the study time zone.

    Naive datetimes are assumed to already be local wall-clock time.
    """
    tz = config.get_timezone()
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def add_days(dt: datetime, days: int) -> datetime:
    """
    Add calendar days, keeping the wall-clock time of day.

    Args:
        dt: Reference datetime
        days: Number of days (may be 0 or negative)

    Returns:
        Local datetime `days` calendar days after `dt`
    """
    return to_local(dt) + timedelta(days=days)


def start_of_day(dt: datetime) -> datetime:
    return to_local(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    """Last representable instant of the local calendar day of `dt`."""
    return to_local(dt).replace(hour=23, minute=59, second=59, microsecond=999999)


def is_same_day(a: datetime, b: datetime) -> bool:
    return to_local(a).date() == to_local(b).date()


def days_between(a: datetime, b: datetime) -> int:
    """
    Calendar-day difference from `a` to `b`, ignoring time of day.

    Negative when `b` falls on an earlier day than `a`.
    """
    return (to_local(b).date() - to_local(a).date()).days


def resolve_now(value: Optional[datetime]) -> datetime:
    """Return `value` in local time, or the current time when None."""
    return now() if value is None else to_local(value)
