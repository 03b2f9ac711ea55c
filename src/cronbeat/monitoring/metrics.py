"""Prometheus metrics for cronbeat components."""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    generate_latest,
)

# Tracker
STATUS_WRITES = Counter(
    "cronbeat_status_writes_total", "Persisted job status writes", ["status"]
)
HEARTBEATS_THROTTLED = Counter(
    "cronbeat_heartbeats_throttled_total",
    "Heartbeat calls skipped because the interval had not elapsed",
)
DETACHED_RECORDS = Counter(
    "cronbeat_detached_records_total",
    "Cached job records discarded after detaching from the store session",
)

# Monitor
JOBS_MARKED_CRASHED = Counter(
    "cronbeat_jobs_marked_crashed_total",
    "Jobs marked crashed by the monitor after a stale heartbeat",
)
STALE_JOBS = Gauge(
    "cronbeat_stale_jobs",
    "Non-idle jobs with a stale heartbeat at the last monitor sweep",
)

__all__ = [
    "STATUS_WRITES",
    "HEARTBEATS_THROTTLED",
    "DETACHED_RECORDS",
    "JOBS_MARKED_CRASHED",
    "STALE_JOBS",
    "CONTENT_TYPE_LATEST",
    "generate_latest",
]
