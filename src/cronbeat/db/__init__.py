"""
Persistence layer for job records.
"""

from cronbeat.db.base import JobStore, StoreFailure
from cronbeat.db.connector import Base, JobDbConnector
from cronbeat.db.job_record import JobRecord
from cronbeat.db.memory_store import InMemoryJobStore
from cronbeat.db.sql_store import SqlJobStore

__all__ = [
    "Base",
    "InMemoryJobStore",
    "JobDbConnector",
    "JobRecord",
    "JobStore",
    "SqlJobStore",
    "StoreFailure",
]
