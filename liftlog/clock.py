"""Timestamps are stored naive, in UTC, to match the ``timestamp`` columns."""
from datetime import date, datetime, time, timezone

# Last instant of a day as the dashboard query sees it (exclusive upper bound)
END_OF_DAY = time(23, 59, 59, 999000)

def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)

def day_bounds(day: date) -> tuple[datetime, datetime]:
    """``[day 00:00:00.000, day 23:59:59.999)`` as naive datetimes."""
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)
