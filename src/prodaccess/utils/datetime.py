# prodaccess/utils/datetime.py

from __future__ import annotations

from datetime import datetime, timezone


def format_datetime(date: datetime) -> str:
    """
    Format a datetime as 'Jan 15 14:30:45 2024 UTC'.

    Naive datetimes are treated as UTC; aware ones are converted.
    """
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)

    return date.astimezone(timezone.utc).strftime("%b %d %H:%M:%S %Y UTC")

def now_utc() -> datetime:
    """Return current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
