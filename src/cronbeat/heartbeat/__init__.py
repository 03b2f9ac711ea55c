"""
Job heartbeat tracking and crash detection.
"""

from cronbeat.heartbeat.models import (
    DEFAULT_CRASH_THRESHOLD_MINUTES,
    DEFAULT_HEARTBEAT_INTERVAL_SECONDS,
    JobStatus,
)
from cronbeat.heartbeat.monitor import CrashMonitor
from cronbeat.heartbeat.staleness import heartbeat_age, is_stale
from cronbeat.heartbeat.tracker import HeartbeatTracker

__all__ = [
    "CrashMonitor",
    "HeartbeatTracker",
    "JobStatus",
    "heartbeat_age",
    "is_stale",
    "DEFAULT_CRASH_THRESHOLD_MINUTES",
    "DEFAULT_HEARTBEAT_INTERVAL_SECONDS",
]
