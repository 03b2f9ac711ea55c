"""Abstract job store contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from cronbeat.db.job_record import JobRecord


class StoreFailure(RuntimeError):
    """Persistence backend unreachable or rejected a write."""


class JobStore(ABC):
    """Persists and retrieves job records by their unique name."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional["JobRecord"]:
        ...

    @abstractmethod
    def create(self, name: str) -> "JobRecord":
        """Build a new idle record without a heartbeat. Not persisted."""
        ...

    @abstractmethod
    def save(self, record: "JobRecord") -> None:
        """Insert or update `record` and commit immediately."""
        ...

    @abstractmethod
    def is_detached(self, record: "JobRecord") -> bool:
        """True if `record` is not live in the store's current session."""
        ...

    @abstractmethod
    def list_records(self) -> List["JobRecord"]:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Drop the session's working set; previously returned records become detached."""
        ...
