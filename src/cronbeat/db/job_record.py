"""Cron job table model."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cronbeat.db.connector import Base
from cronbeat.heartbeat.models import JobStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobRecord(Base):
    """Persisted liveness state of one named job."""

    __tablename__ = "cron_job"
    __table_args__ = (UniqueConstraint("name", name="un_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), nullable=False)
    status: Mapped[JobStatus] = mapped_column(
        Enum(
            JobStatus,
            name="cron_status",
            values_callable=lambda enum: [member.value for member in enum],
            validate_strings=True,
        ),
        nullable=False,
        default=JobStatus.IDLE,
    )
    heartbeat: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    command: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    schedule: Mapped[Optional[str]] = mapped_column(String(191), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(191), nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def copy(self) -> "JobRecord":
        """Return an unattached copy carrying the same column values."""
        return JobRecord(
            id=self.id,
            name=self.name,
            status=self.status,
            heartbeat=self.heartbeat,
            command=self.command,
            schedule=self.schedule,
            description=self.description,
            enabled=self.enabled,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"JobRecord(id={self.id}, name={self.name}, "
            f"status={self.status}, heartbeat={self.heartbeat})"
        )
