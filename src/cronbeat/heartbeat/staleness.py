"""Heartbeat age and staleness checks.

Both functions are pure apart from logging, so a monitor can call them on
records it listed itself without building a tracker.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Optional, Union

from cronbeat.heartbeat.models import DEFAULT_CRASH_THRESHOLD_MINUTES
from cronbeat.utils.logging import get_logger

logger = get_logger(__name__)

# Age reported for a job that never wrote a heartbeat.
NEVER_BEATEN_AGE = sys.maxsize


def _align(heartbeat: datetime, now: datetime) -> tuple[datetime, datetime]:
    """Give a naive datetime the timezone of the other operand."""
    if heartbeat.tzinfo is None and now.tzinfo is None:
        return heartbeat, now
    if heartbeat.tzinfo is None:
        return heartbeat.replace(tzinfo=now.tzinfo), now
    if now.tzinfo is None:
        return heartbeat, now.replace(tzinfo=heartbeat.tzinfo)
    return heartbeat, now


def heartbeat_age(heartbeat: Optional[datetime], now: datetime) -> Union[int, float]:
    """Return the heartbeat's age in seconds.

    Args:
        heartbeat: Last heartbeat timestamp, or None if the job never beat.
        now: Reference time.

    Returns:
        ``abs(now - heartbeat)`` in seconds, or ``sys.maxsize`` for None.
    """
    if heartbeat is None:
        return NEVER_BEATEN_AGE

    heartbeat, now = _align(heartbeat, now)
    delta = (now - heartbeat).total_seconds()
    if delta < 0:
        logger.warning(
            "heartbeat_clock_skew",
            heartbeat=heartbeat.isoformat(),
            now=now.isoformat(),
            skew_seconds=-delta,
        )
    return abs(delta)


def is_stale(
    heartbeat: Optional[datetime],
    now: datetime,
    crash_threshold_minutes: float = DEFAULT_CRASH_THRESHOLD_MINUTES,
) -> bool:
    """True if the heartbeat is old enough to assume the job crashed."""
    return (heartbeat_age(heartbeat, now) / 60) > crash_threshold_minutes


__all__ = ["heartbeat_age", "is_stale", "NEVER_BEATEN_AGE"]
