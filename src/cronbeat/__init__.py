"""cronbeat - heartbeat and crash tracking for long-running jobs."""

__version__ = "0.1.0"

from cronbeat.db import InMemoryJobStore, JobDbConnector, JobRecord, JobStore, SqlJobStore, StoreFailure  # noqa: E402
from cronbeat.heartbeat import CrashMonitor, HeartbeatTracker, JobStatus, heartbeat_age, is_stale  # noqa: E402
from cronbeat.utils import Clock  # noqa: E402

__all__ = [
    "Clock",
    "CrashMonitor",
    "HeartbeatTracker",
    "InMemoryJobStore",
    "JobDbConnector",
    "JobRecord",
    "JobStatus",
    "JobStore",
    "SqlJobStore",
    "StoreFailure",
    "heartbeat_age",
    "is_stale",
]
