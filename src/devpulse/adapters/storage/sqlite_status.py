"""SQLite storage adapter for service statuses."""

from collections.abc import Iterable

from devpulse.core.models import ServiceStatus
from devpulse.core.ports import Row, StorePort

STATUS_SCHEMA = """
CREATE TABLE IF NOT EXISTS system_status (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    service TEXT UNIQUE,
    status TEXT,
    uptime REAL,
    lastChecked DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""

_INSERT_STATUS = """
INSERT INTO system_status (service, status, uptime) VALUES (?, ?, ?)
"""

_SELECT_STATUSES = """
SELECT id, service, status, uptime, lastChecked
FROM system_status
ORDER BY id ASC
"""

_COUNT_STATUSES = """
SELECT COUNT(*) AS count FROM system_status
"""


def _from_row(row: Row) -> ServiceStatus:
    return ServiceStatus(
        id=row["id"],
        service=row["service"],
        status=row["status"],
        uptime=row["uptime"],
        last_checked=row["lastChecked"],
    )


class SQLiteStatusStorage:
    """Service statuses stored in the ``system_status`` table.

    The service column is unique; inserting a duplicate name raises
    QueryError. Reads never write the uptime back.
    """

    table_name = "system_status"
    schema = STATUS_SCHEMA

    def __init__(self, store: StorePort) -> None:
        self._store = store

    async def write_many(self, statuses: Iterable[ServiceStatus]) -> int:
        """Insert several statuses in one batch."""
        return await self._store.execute_many(
            _INSERT_STATUS, [(s.service, s.status, s.uptime) for s in statuses]
        )

    async def all(self) -> list[ServiceStatus]:
        """Return every stored status in insertion order."""
        rows = await self._store.query_all(_SELECT_STATUSES)
        return [_from_row(row) for row in rows]

    async def count(self) -> int:
        """Return number of stored services."""
        row = await self._store.query_one(_COUNT_STATUSES)
        return row["count"] if row else 0
