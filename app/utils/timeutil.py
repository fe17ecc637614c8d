"""
UTC timestamp helpers shared by both storage backends.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def advance_timestamp(previous: Optional[datetime]) -> datetime:
    """
    Return a refresh timestamp that is strictly later than ``previous``.

    Used for updatedAt / lastActivity so back-to-back updates within one clock
    tick still move the value forward.
    """
    now = utcnow()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    return now if now > previous else previous + _TICK


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Start of a trailing window of ``days`` days ending at ``now``."""
    return (now or utcnow()) - timedelta(days=days)
