"""Heartbeat tracking for a single named job.

Examples:
    ```python
    from cronbeat.db import JobDbConnector, SqlJobStore
    from cronbeat.heartbeat import HeartbeatTracker

    store = SqlJobStore.from_connector(JobDbConnector("sqlite:///cronbeat.db"))
    tracker = HeartbeatTracker(store)
    tracker.initiate("import-products")

    if tracker.is_already_running():
        raise SystemExit("import-products is already running")

    try:
        for row in rows:
            import_row(row)
            tracker.heartbeat()
    except Exception:
        tracker.crash()
        raise
    tracker.stop()
    ```
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from cronbeat.db.base import JobStore
from cronbeat.heartbeat.models import (
    DEFAULT_CRASH_THRESHOLD_MINUTES,
    DEFAULT_HEARTBEAT_INTERVAL_SECONDS,
    NAMELESS_PREFIX,
    JobStatus,
)
from cronbeat.heartbeat.staleness import heartbeat_age, is_stale
from cronbeat.monitoring.metrics import (
    DETACHED_RECORDS,
    HEARTBEATS_THROTTLED,
    STATUS_WRITES,
)
from cronbeat.utils.clock import Clock
from cronbeat.utils.logging import get_logger

if TYPE_CHECKING:
    from cronbeat.config.config import HeartbeatConfig
    from cronbeat.db.job_record import JobRecord


class HeartbeatTracker:
    """Records status and heartbeats of one named job in a job store."""

    def __init__(
        self,
        store: JobStore,
        *,
        clock: Optional[Clock] = None,
        heartbeat_interval_seconds: float = DEFAULT_HEARTBEAT_INTERVAL_SECONDS,
        crash_threshold_minutes: float = DEFAULT_CRASH_THRESHOLD_MINUTES,
    ) -> None:
        """
        Args:
            store: Store holding the job records.
            clock: Time source; defaults to a UTC clock.
            heartbeat_interval_seconds: Minimum spacing between persisted heartbeats.
            crash_threshold_minutes: Heartbeat age after which a job counts as crashed.
        """
        self.store = store
        self.clock = clock or Clock()
        self.heartbeat_interval_seconds = heartbeat_interval_seconds
        self.crash_threshold_minutes = crash_threshold_minutes
        self._name: Optional[str] = None
        self._record: Optional["JobRecord"] = None
        # Last heartbeat known to be committed; never read back from the record.
        self._last_heartbeat: Optional[datetime] = None
        self._record_persisted = False
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(cls, store: JobStore, config: "HeartbeatConfig") -> "HeartbeatTracker":
        return cls(
            store,
            clock=config.build_clock(),
            heartbeat_interval_seconds=config.heartbeat_interval_seconds,
            crash_threshold_minutes=config.crash_threshold_minutes,
        )

    @property
    def name(self) -> Optional[str]:
        return self._name

    def initiate(self, name: Optional[str] = None) -> None:
        """Bind the tracker to a job name and forget any cached record."""
        self._name = name if name is not None else self._generate_name(self.clock.now())
        self._record = None
        self._last_heartbeat = None
        self._record_persisted = False

    def heartbeat(self) -> bool:
        """Signal that the job is still running.

        Only writes when the last known heartbeat is older than the
        heartbeat interval, so it is safe to call once per processed item.

        Returns:
            True if a heartbeat was persisted.
        """
        now = self.clock.now()
        if not self._should_heartbeat(now):
            HEARTBEATS_THROTTLED.inc()
            return False

        self._write_status(JobStatus.RUNNING, now)
        return True

    def stop(self) -> None:
        """Signal that the job finished."""
        self._write_status(JobStatus.IDLE, self.clock.now())

    def crash(self) -> None:
        """Signal that the job failed."""
        self._write_status(JobStatus.CRASHED, self.clock.now())

    def is_already_running(self) -> bool:
        """Advisory check before starting; no lock is taken."""
        return self._resolve(self.clock.now()).status != JobStatus.IDLE

    def has_status_running(self) -> bool:
        return self._resolve(self.clock.now()).status == JobStatus.RUNNING

    def is_stale(self, heartbeat: Optional[datetime], now: Optional[datetime] = None) -> bool:
        """True if `heartbeat` is older than the crash threshold."""
        return is_stale(heartbeat, now or self.clock.now(), self.crash_threshold_minutes)

    def heartbeat_age(
        self, heartbeat: Optional[datetime], now: Optional[datetime] = None
    ) -> Union[int, float]:
        return heartbeat_age(heartbeat, now or self.clock.now())

    def _should_heartbeat(self, now: datetime) -> bool:
        if self._last_heartbeat is None:
            self._last_heartbeat = self._resolve(now).heartbeat

        return heartbeat_age(self._last_heartbeat, now) > self.heartbeat_interval_seconds

    def _resolve(self, now: datetime) -> "JobRecord":
        """Return the live record for the bound name, creating an unsaved one if needed."""
        if self._name is None:
            self._name = self._generate_name(now)

        if self._record is not None and self.store.is_detached(self._record):
            # Saving this handle would insert a second row for the same name.
            if self._record_persisted:
                DETACHED_RECORDS.inc()
                self.logger.info("heartbeat_record_detached", job_name=self._name)
            self._record = None

        if self._record is None:
            self._record = self.store.find_by_name(self._name)
            self._record_persisted = self._record is not None

        if self._record is None:
            self._record = self.store.create(self._name)

        return self._record

    def _write_status(self, status: JobStatus, now: datetime) -> None:
        record = self._resolve(now)
        previous = record.status

        record.status = status
        record.heartbeat = now
        self.store.save(record)
        self._last_heartbeat = now
        self._record_persisted = True

        STATUS_WRITES.labels(status=status.value).inc()
        if previous == status:
            self.logger.debug("heartbeat_written", job_name=self._name, status=status.value)
        else:
            self.logger.info(
                "job_status_changed",
                job_name=self._name,
                status=status.value,
                previous_status=previous.value if previous is not None else None,
            )

    @staticmethod
    def _generate_name(now: datetime) -> str:
        return f"{NAMELESS_PREFIX}{now.strftime('%Y%m%d_%H%M%S')}"


__all__ = ["HeartbeatTracker"]
