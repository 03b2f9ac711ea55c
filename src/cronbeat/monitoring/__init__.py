"""
Monitoring utilities for cronbeat.
"""

from cronbeat.monitoring.metrics import (
    CONTENT_TYPE_LATEST,
    DETACHED_RECORDS,
    HEARTBEATS_THROTTLED,
    JOBS_MARKED_CRASHED,
    STALE_JOBS,
    STATUS_WRITES,
    generate_latest,
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
