"""In-memory job store that mimics ORM session attachment."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from cronbeat.db.base import JobStore, StoreFailure
from cronbeat.db.job_record import JobRecord
from cronbeat.heartbeat.models import JobStatus
from cronbeat.utils.clock import Clock


class InMemoryJobStore(JobStore):
    """
    Dict-backed store for tests and single-process tools.

    Committed rows are private copies. Handles returned by
    `find_by_name`/`list_records` or passed to a successful `save` stay
    "attached" (one handle per name, like an identity map) until `clear()`.
    A failed save detaches its handle, so the caller must load the row again
    and sees only committed values. Saving a detached handle whose name
    already exists fails the same way an INSERT against the unique name
    constraint would.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock or Clock()
        self._rows: Dict[str, JobRecord] = {}
        self._session: Dict[int, JobRecord] = {}
        self._next_id = 1
        self.available = True
        self.writes: List[Tuple[str, JobStatus, Optional[datetime]]] = []

    def find_by_name(self, name: str) -> Optional[JobRecord]:
        self._ensure_available()
        row = self._rows.get(name)
        if row is None:
            return None
        return self._handle_for(row)

    def create(self, name: str) -> JobRecord:
        return JobRecord(name=name, status=JobStatus.IDLE, heartbeat=None, enabled=True)

    def save(self, record: JobRecord) -> None:
        try:
            self._ensure_available()
            if self.is_detached(record) and record.name in self._rows:
                raise StoreFailure(
                    f"Duplicate entry {record.name!r} for unique constraint un_name"
                )
        except StoreFailure:
            self._session.pop(id(record), None)
            raise

        now = self.clock.now()
        if self.is_detached(record):
            record.id = self._next_id
            self._next_id += 1
            record.created_at = now
            self._attach(record)

        record.updated_at = now
        self._rows[record.name] = record.copy()
        self.writes.append((record.name, record.status, record.heartbeat))

    def is_detached(self, record: JobRecord) -> bool:
        return self._session.get(id(record)) is not record

    def list_records(self) -> List[JobRecord]:
        self._ensure_available()
        return [self._handle_for(self._rows[name]) for name in sorted(self._rows)]

    def clear(self) -> None:
        self._session.clear()

    def _handle_for(self, row: JobRecord) -> JobRecord:
        for handle in self._session.values():
            if handle.name == row.name:
                return handle
        handle = row.copy()
        self._attach(handle)
        return handle

    def _attach(self, record: JobRecord) -> None:
        self._session[id(record)] = record

    def _ensure_available(self) -> None:
        if not self.available:
            raise StoreFailure("Job store is unavailable")


__all__ = ["InMemoryJobStore"]
