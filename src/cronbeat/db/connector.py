"""
SQLAlchemy engine/session wiring for the cron job table.
"""
import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Base declarative class."""


class JobDbConnector:
    """
    Sync SQLAlchemy connector owning the engine and session factory.
    """

    def __init__(self, db_url: Optional[str] = None, echo: bool = False):
        self.db_url = db_url or os.getenv("CRONBEAT_DB_URL")
        if not self.db_url:
            raise RuntimeError("CRONBEAT_DB_URL env variable is required")

        self.engine: Engine = create_engine(
            self.db_url, echo=echo, pool_pre_ping=True, future=True
        )
        # Records stay readable after commit and after the session is cleared.
        self.session_factory: sessionmaker[Session] = sessionmaker(
            self.engine, expire_on_commit=False
        )

    def init_models(self) -> None:
        """Create tables if they do not exist."""
        # Registers JobRecord on Base.metadata.
        from cronbeat.db import job_record  # noqa: F401

        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = [
    "Base",
    "JobDbConnector",
]
