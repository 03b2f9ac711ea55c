"""SQLAlchemy-backed job store."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cronbeat.db.base import JobStore, StoreFailure
from cronbeat.db.connector import JobDbConnector
from cronbeat.db.job_record import JobRecord
from cronbeat.heartbeat.models import JobStatus
from cronbeat.utils.logging import get_logger

logger = get_logger(__name__)


class SqlJobStore(JobStore):
    """
    Job store working through one long-lived ORM session.

    The session is usually shared with the job itself, which may call
    `clear()` (or `session.expunge_all()`) to bound memory during long
    batches. Records handed out before that point are no longer live.
    """

    def __init__(self, session: Session):
        self.session = session

    @classmethod
    def from_connector(cls, connector: JobDbConnector) -> "SqlJobStore":
        return cls(connector.session_factory())

    def find_by_name(self, name: str) -> Optional[JobRecord]:
        stmt = select(JobRecord).where(JobRecord.name == name)
        try:
            return self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreFailure(f"Failed to look up job {name!r}: {exc}") from exc

    def create(self, name: str) -> JobRecord:
        return JobRecord(name=name, status=JobStatus.IDLE, heartbeat=None, enabled=True)

    def save(self, record: JobRecord) -> None:
        name = record.name
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            # Rollback expired the record; reading it would query the failing backend.
            if record in self.session:
                self.session.expunge(record)
            raise StoreFailure(f"Failed to save job {name!r}: {exc}") from exc

    def is_detached(self, record: JobRecord) -> bool:
        state = inspect(record)
        # Transient, pending, deleted, detached, or owned by another session.
        return not state.persistent or state.session is not self.session

    def list_records(self) -> List[JobRecord]:
        stmt = select(JobRecord).order_by(JobRecord.name)
        try:
            return list(self.session.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreFailure(f"Failed to list jobs: {exc}") from exc

    def clear(self) -> None:
        self.session.expunge_all()

    def close(self) -> None:
        self.session.close()

    def _rollback(self) -> None:
        try:
            self.session.rollback()
        except SQLAlchemyError:
            logger.warning("store_rollback_failed", exc_info=True)


__all__ = ["SqlJobStore"]
