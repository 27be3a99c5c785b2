"""SQLite storage adapter for dashboard logs."""

from collections.abc import Iterable

from devpulse.core.models import LogEntry
from devpulse.core.ports import Row, StorePort

LOGS_SCHEMA = """
CREATE TABLE IF NOT EXISTS logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
    level TEXT,
    message TEXT,
    source TEXT,
    responseTime INTEGER
)
"""

_INSERT_LOG = """
INSERT INTO logs (level, message, source, responseTime) VALUES (?, ?, ?, ?)
"""

_SELECT_RECENT_LOGS = """
SELECT id, timestamp, level, message, source, responseTime
FROM logs
ORDER BY timestamp DESC, id DESC
LIMIT ?
"""

_SELECT_LOG_BY_ID = """
SELECT id, timestamp, level, message, source, responseTime
FROM logs
WHERE id = ?
"""

_COUNT_LOGS = """
SELECT COUNT(*) AS count FROM logs
"""


def _from_row(row: Row) -> LogEntry:
    return LogEntry(
        id=row["id"],
        timestamp=row["timestamp"],
        level=row["level"],
        message=row["message"],
        source=row["source"],
        response_time=row["responseTime"],
    )


def _to_params(entry: LogEntry) -> tuple[str, str, str, int]:
    return (entry.level, entry.message, entry.source, entry.response_time)


class SQLiteLogStorage:
    """Dashboard log lines stored in the ``logs`` table.

    Rows are only ever inserted; ordering is newest first by timestamp,
    with the row id breaking ties inside the same second.
    """

    table_name = "logs"
    schema = LOGS_SCHEMA

    def __init__(self, store: StorePort) -> None:
        self._store = store

    async def write(self, entry: LogEntry) -> LogEntry:
        """Insert entry and return it as stored, with id and timestamp."""
        row_id = await self._store.execute(_INSERT_LOG, _to_params(entry))
        row = await self._store.query_one(_SELECT_LOG_BY_ID, (row_id,))
        if row is None:
            return entry
        return _from_row(row)

    async def write_many(self, entries: Iterable[LogEntry]) -> int:
        """Insert several entries in one batch."""
        return await self._store.execute_many(
            _INSERT_LOG, [_to_params(e) for e in entries]
        )

    async def recent(self, limit: int) -> list[LogEntry]:
        """Return the newest ``limit`` entries, newest first."""
        rows = await self._store.query_all(_SELECT_RECENT_LOGS, (limit,))
        return [_from_row(row) for row in rows]

    async def count(self) -> int:
        """Return total number of log entries."""
        row = await self._store.query_one(_COUNT_LOGS)
        return row["count"] if row else 0
