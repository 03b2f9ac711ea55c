"""Job status values and tracker defaults."""

from __future__ import annotations

from enum import Enum

DEFAULT_HEARTBEAT_INTERVAL_SECONDS = 10
DEFAULT_CRASH_THRESHOLD_MINUTES = 15
NAMELESS_PREFIX = "nameless_process_"


class JobStatus(str, Enum):
    """Liveness status of a tracked job."""

    IDLE = "idle"
    RUNNING = "running"
    CRASHED = "crashed"


__all__ = [
    "JobStatus",
    "DEFAULT_HEARTBEAT_INTERVAL_SECONDS",
    "DEFAULT_CRASH_THRESHOLD_MINUTES",
    "NAMELESS_PREFIX",
]
