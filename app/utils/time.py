"""Time utilities (naive UTC for DB storage)."""

from datetime import date, datetime, timedelta, timezone


def now_utc_naive() -> datetime:
    """
    Current time in UTC, returned as naive datetime for DB storage.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    """Normalize a datetime to naive UTC (naive values are assumed UTC)."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def window_start(now: datetime, days: int) -> datetime:
    """Start of a trailing window of `days` ending at `now`."""
    return to_naive_utc(now) - timedelta(days=days)


def previous_month_bounds(today: date) -> tuple[date, date]:
    """First and last calendar day of the month before `today`."""
    last_day = today.replace(day=1) - timedelta(days=1)
    return last_day.replace(day=1), last_day
