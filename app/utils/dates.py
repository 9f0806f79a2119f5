from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalizes a datetime to timezone-aware UTC.
    Naive values are taken to already be in UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_week(moment: datetime) -> datetime:
    # Weeks start on Sunday at midnight
    days_since_sunday = (moment.weekday() + 1) % 7
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days_since_sunday)


def end_of_week(moment: datetime) -> datetime:
    return start_of_week(moment) + timedelta(days=7) - timedelta(microseconds=1)
