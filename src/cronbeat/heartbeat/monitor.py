"""Periodic sweep that marks jobs with stale heartbeats as crashed."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from cronbeat.db.base import JobStore, StoreFailure
from cronbeat.heartbeat.models import DEFAULT_CRASH_THRESHOLD_MINUTES, JobStatus
from cronbeat.heartbeat.staleness import heartbeat_age, is_stale
from cronbeat.monitoring.metrics import JOBS_MARKED_CRASHED, STALE_JOBS
from cronbeat.utils.clock import Clock
from cronbeat.utils.logging import get_logger, job_context

if TYPE_CHECKING:
    from cronbeat.db.job_record import JobRecord

logger = get_logger(__name__)


class CrashMonitor:
    """Finds non-idle jobs whose last heartbeat exceeds the crash threshold."""

    def __init__(
        self,
        store: JobStore,
        *,
        clock: Optional[Clock] = None,
        crash_threshold_minutes: float = DEFAULT_CRASH_THRESHOLD_MINUTES,
    ) -> None:
        self.store = store
        self.clock = clock or Clock()
        self.crash_threshold_minutes = crash_threshold_minutes
        self._shutdown = threading.Event()

    def find_stale(self, now: Optional[datetime] = None) -> List["JobRecord"]:
        """Return every non-idle record with a stale heartbeat."""
        now = now or self.clock.now()
        return [
            record
            for record in self.store.list_records()
            if record.status != JobStatus.IDLE
            and is_stale(record.heartbeat, now, self.crash_threshold_minutes)
        ]

    def sweep(self) -> List[str]:
        """Mark stale running jobs as crashed.

        Jobs already marked crashed keep the heartbeat of their crash.

        Returns:
            Names of the jobs marked crashed in this sweep.
        """
        now = self.clock.now()
        stale = self.find_stale(now)
        STALE_JOBS.set(len(stale))

        marked: List[str] = []
        for record in stale:
            if record.status == JobStatus.CRASHED:
                continue

            with job_context(record.name):
                age = heartbeat_age(record.heartbeat, now)
                previous = record.status
                record.status = JobStatus.CRASHED
                record.heartbeat = now
                self.store.save(record)

                JOBS_MARKED_CRASHED.inc()
                logger.warning(
                    "job_marked_crashed",
                    previous_status=previous.value,
                    heartbeat_age_seconds=age,
                    crash_threshold_minutes=self.crash_threshold_minutes,
                )
            marked.append(record.name)

        logger.info("monitor_sweep_done", stale=len(stale), marked=len(marked))
        return marked

    def run_forever(self, interval_seconds: float = 60) -> None:
        """Sweep every `interval_seconds` until `stop()` is called."""
        while not self._shutdown.is_set():
            try:
                self.sweep()
            except StoreFailure:
                logger.exception("monitor_sweep_failed")
            self._shutdown.wait(interval_seconds)

    def stop(self) -> None:
        self._shutdown.set()

    @property
    def stopping(self) -> bool:
        return self._shutdown.is_set()


__all__ = ["CrashMonitor"]
