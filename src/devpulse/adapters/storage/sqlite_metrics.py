"""SQLite storage adapter for metric samples."""

from collections.abc import Iterable

from devpulse.core.drift import CPU_BOUNDS, MEMORY_BOUNDS, MetricStep
from devpulse.core.models import DashboardSummary, MetricSample
from devpulse.core.ports import Row, StorePort

METRICS_SCHEMA = """
CREATE TABLE IF NOT EXISTS metrics (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
    cpu REAL,
    memory REAL,
    requests INTEGER,
    errors INTEGER
)
"""

_INSERT_METRIC = """
INSERT INTO metrics (cpu, memory, requests, errors) VALUES (?, ?, ?, ?)
"""

# Reads the latest sample and appends its successor in one statement, so
# concurrent appends always build on the newest row. id breaks ties between
# rows inserted within the same second. Mirrors drift.apply_metric_step.
_APPEND_DRIFTED_METRIC = """
INSERT INTO metrics (cpu, memory, requests, errors)
SELECT
    MAX(?, MIN(?, cpu + ?)),
    MAX(?, MIN(?, memory + ?)),
    requests + ?,
    MAX(0, errors + ?)
FROM metrics
ORDER BY timestamp DESC, id DESC
LIMIT 1
RETURNING id, timestamp, cpu, memory, requests, errors
"""

_COUNT_METRICS = """
SELECT COUNT(*) AS count FROM metrics
"""

# One statement so every aggregate reads the same snapshot
_SELECT_SUMMARY = """
SELECT
    (SELECT COALESCE(SUM(requests), 0) FROM metrics) AS total_requests,
    (SELECT COUNT(*) FROM logs WHERE level = 'error') AS total_errors,
    (SELECT AVG(cpu) FROM metrics) AS avg_cpu,
    (SELECT AVG(memory) FROM metrics) AS avg_memory
"""


def _from_row(row: Row) -> MetricSample:
    return MetricSample(
        id=row["id"],
        timestamp=row["timestamp"],
        cpu=row["cpu"],
        memory=row["memory"],
        requests=row["requests"],
        errors=row["errors"],
    )


def _to_params(sample: MetricSample) -> tuple[float, float, int, int]:
    return (sample.cpu, sample.memory, sample.requests, sample.errors)


class SQLiteMetricsStorage:
    """Append-only metrics series stored in the ``metrics`` table."""

    table_name = "metrics"
    schema = METRICS_SCHEMA

    def __init__(self, store: StorePort) -> None:
        self._store = store

    async def append_drifted(self, step: MetricStep) -> MetricSample | None:
        """Append the successor of the latest sample and return it.

        Returns None without writing when the series is empty.
        """
        row = await self._store.execute_returning(
            _APPEND_DRIFTED_METRIC,
            (
                *CPU_BOUNDS,
                step.cpu,
                *MEMORY_BOUNDS,
                step.memory,
                step.requests,
                step.errors,
            ),
        )
        return _from_row(row) if row is not None else None

    async def append_many(self, samples: Iterable[MetricSample]) -> int:
        """Insert several samples in one batch."""
        return await self._store.execute_many(
            _INSERT_METRIC, [_to_params(s) for s in samples]
        )

    async def count(self) -> int:
        """Return total number of stored samples."""
        row = await self._store.query_one(_COUNT_METRICS)
        return row["count"] if row else 0

    async def summary(self) -> DashboardSummary:
        """Aggregate every stored metric and error log.

        Averages are rounded to two decimals and are 0 when there are no
        samples.
        """
        row = await self._store.query_one(_SELECT_SUMMARY)
        if row is None:
            return DashboardSummary(0, 0, 0, 0)
        avg_cpu = row["avg_cpu"]
        avg_memory = row["avg_memory"]
        return DashboardSummary(
            total_requests=row["total_requests"],
            total_errors=row["total_errors"],
            avg_cpu=round(avg_cpu, 2) if avg_cpu is not None else 0,
            avg_memory=round(avg_memory, 2) if avg_memory is not None else 0,
        )
