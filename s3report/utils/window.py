"""Target day and query window selection."""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple


WINDOW_LENGTH = timedelta(minutes=1)


def target_day(now: Optional[datetime] = None, previous_day: bool = False) -> date:
    """
    Return the UTC date whose metrics should be collected.

    Args:
        now: Current time, defaults to datetime.now(timezone.utc). Naive values are taken as UTC.
        previous_day: Collect yesterday's metrics instead of today's

    Returns:
        date: Target day (date component only)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    if previous_day:
        now = now - timedelta(hours=24)

    return now.date()


def query_window(day: date) -> Tuple[datetime, datetime]:
    """
    Return the one-minute statistics window for a day.

    S3 storage metrics are published once a day, so the window always
    starts at 00:00:00 UTC and ends at 00:01:00 UTC.

    Args:
        day: Target day

    Returns:
        Tuple[datetime, datetime]: (start, end), both timezone-aware UTC
    """
    start = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    return start, start + WINDOW_LENGTH
