import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from cronbeat.db.connector import JobDbConnector  # noqa: E402
from cronbeat.db.memory_store import InMemoryJobStore  # noqa: E402
from cronbeat.db.sql_store import SqlJobStore  # noqa: E402
from cronbeat.utils.clock import Clock  # noqa: E402

START = datetime(2026, 1, 5, 8, 30, 0, tzinfo=timezone.utc)


class FakeClock(Clock):
    """Clock frozen at a settable instant."""

    def __init__(self, start: datetime = START) -> None:
        super().__init__(start.tzinfo)
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> datetime:
        self.current = self.current + timedelta(seconds=seconds)
        return self.current

    def at(self, seconds: float) -> datetime:
        """Jump to START + seconds."""
        self.current = START + timedelta(seconds=seconds)
        return self.current


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line(
        "markers",
        "integration: tests that hit a real database (SQLite file)",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> InMemoryJobStore:
    return InMemoryJobStore()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'cronbeat.db'}"


@pytest.fixture
def connector(db_url: str) -> Iterator[JobDbConnector]:
    """Connector with tables created on a per-test SQLite file."""
    connector = JobDbConnector(db_url)
    connector.init_models()
    try:
        yield connector
    finally:
        connector.dispose()


@pytest.fixture
def sql_store(connector: JobDbConnector) -> Iterator[SqlJobStore]:
    store = SqlJobStore.from_connector(connector)
    try:
        yield store
    finally:
        store.close()
