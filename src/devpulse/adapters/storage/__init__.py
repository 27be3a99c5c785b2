"""SQLite storage adapters and database initialization."""

from devpulse.adapters.storage.initializer import (
    SeedReport,
    create_schema,
    initialize,
)
from devpulse.adapters.storage.sqlite_base import SQLiteStore
from devpulse.adapters.storage.sqlite_issues import SQLiteIssueStorage
from devpulse.adapters.storage.sqlite_logs import SQLiteLogStorage
from devpulse.adapters.storage.sqlite_metrics import SQLiteMetricsStorage
from devpulse.adapters.storage.sqlite_status import SQLiteStatusStorage

__all__ = [
    "SQLiteIssueStorage",
    "SQLiteLogStorage",
    "SQLiteMetricsStorage",
    "SQLiteStatusStorage",
    "SQLiteStore",
    "SeedReport",
    "create_schema",
    "initialize",
]
