"""Database package for connection, session management and record storage."""

from ironhook.database.database import (
    SUPPORTED_ENGINES,
    Database,
    DatabaseConfig,
)
from ironhook.database.record_store import RecordStore, SqlAlchemyRecordStore

__all__ = [
    "SUPPORTED_ENGINES",
    "Database",
    "DatabaseConfig",
    "RecordStore",
    "SqlAlchemyRecordStore",
]
