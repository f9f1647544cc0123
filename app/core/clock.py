# app/core/clock.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    # SQLite hands datetimes back without tzinfo, so everything is stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
