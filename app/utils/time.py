"""Time Utilities for UTC management"""

import math
from typing import Optional
from datetime import datetime, timezone, timedelta

_ONE_DAY = timedelta(days=1)


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def stay_days(start: datetime, end: datetime) -> int:
    """Whole days between two instants, rounded up (3 days 2 hours -> 4)."""
    return math.ceil(abs(end - start) / _ONE_DAY)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes are converted to UTC and stripped; naive ones are taken as UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
