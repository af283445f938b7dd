"""Tests for calendar-day date arithmetic."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from core import date_math


class TestToLocal:
    """Tests for conversion to the study time zone."""

    def test_aware_datetime_converted(self, tz: ZoneInfo) -> None:
        """UTC late evening is already the next day in Amsterdam."""
        utc = datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc)
        local = date_math.to_local(utc)
        assert local.tzinfo == tz
        assert (local.day, local.hour) == (11, 0)

    def test_naive_datetime_treated_as_local(self, tz: ZoneInfo) -> None:
        """Naive values keep their wall-clock time."""
        local = date_math.to_local(datetime(2024, 3, 10, 8, 15))
        assert local == datetime(2024, 3, 10, 8, 15, tzinfo=tz)

    def test_resolve_now_defaults_to_current_time(self, tz: ZoneInfo) -> None:
        """None resolves to an aware current time."""
        resolved = date_math.resolve_now(None)
        assert resolved.tzinfo == tz


class TestAddDays:
    """Tests for calendar-day addition."""

    def test_keeps_time_of_day(self, now: datetime) -> None:
        """Adding days keeps the wall-clock time."""
        later = date_math.add_days(now, 7)
        assert later.date() == (now + timedelta(days=7)).date()
        assert (later.hour, later.minute) == (21, 0)

    def test_across_daylight_saving_change(self, tz: ZoneInfo) -> None:
        """The DST switch does not shift the wall-clock time."""
        before = datetime(2024, 3, 30, 9, 30, tzinfo=tz)
        after = date_math.add_days(before, 1)
        assert (after.day, after.hour, after.minute) == (31, 9, 30)
        assert after.utcoffset() == timedelta(hours=2)

    def test_zero_days(self, now: datetime) -> None:
        """Zero days is the same instant."""
        assert date_math.add_days(now, 0) == now


class TestDayBoundaries:
    """Tests for start/end of day and day comparisons."""

    def test_end_of_day(self, now: datetime) -> None:
        """End of day is the last microsecond of the local day."""
        end = date_math.end_of_day(now)
        assert (end.hour, end.minute, end.second, end.microsecond) == (23, 59, 59, 999999)
        assert end.date() == now.date()

    def test_start_of_day(self, now: datetime) -> None:
        """Start of day is local midnight."""
        start = date_math.start_of_day(now)
        assert (start.hour, start.minute) == (0, 0)
        assert start.date() == now.date()

    def test_is_same_day_uses_local_calendar(self, tz: ZoneInfo) -> None:
        """Two instants on different UTC days can share a local day."""
        a = datetime(2024, 3, 10, 0, 30, tzinfo=tz)  # 2024-03-09 23:30 UTC
        b = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        assert date_math.is_same_day(a, b)

    def test_days_between(self, now: datetime) -> None:
        """Difference counts calendar days, ignoring the time of day."""
        assert date_math.days_between(now, now.replace(hour=1)) == 0
        assert date_math.days_between(now, (now + timedelta(days=1)).replace(hour=0)) == 1
        assert date_math.days_between(now, now - timedelta(days=3)) == -3
