#!/usr/bin/env python
"""Time conversion helpers shared by the REST client and the downloader.

All datetimes produced here are naive and expressed in UTC, matching the
timestamps stored in the history files.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional, Tuple

_EPOCH = datetime(1970, 1, 1)


def datetime_to_milliseconds(dt: datetime) -> int:
    """Convert a datetime to Unix milliseconds. Naive values are taken as UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    delta = dt - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def date_to_milliseconds(day: date) -> int:
    """Unix milliseconds of midnight UTC at the start of ``day``."""
    return datetime_to_milliseconds(datetime(day.year, day.month, day.day))


def milliseconds_to_second(timestamp_ms: int) -> datetime:
    """Convert Unix milliseconds to a naive UTC datetime truncated to whole seconds."""
    return _EPOCH + timedelta(seconds=timestamp_ms // 1000)


def day_bounds_milliseconds(day: date) -> Tuple[int, int]:
    """Return ``(start, end)`` in Unix milliseconds covering ``[day, day + 1)``."""
    return date_to_milliseconds(day), date_to_milliseconds(day + timedelta(days=1))


def utc_today(now: Optional[datetime] = None) -> date:
    """Current calendar date in UTC."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def each_day(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end``, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
