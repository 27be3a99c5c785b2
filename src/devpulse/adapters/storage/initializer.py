"""Schema creation and one-time seeding of the dashboard database."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from devpulse.adapters.logging import get_logger
from devpulse.adapters.storage.sqlite_issues import SQLiteIssueStorage
from devpulse.adapters.storage.sqlite_logs import SQLiteLogStorage
from devpulse.adapters.storage.sqlite_metrics import SQLiteMetricsStorage
from devpulse.adapters.storage.sqlite_status import SQLiteStatusStorage
from devpulse.core.errors import InitializationError, QueryError
from devpulse.core.ports import StorePort
from devpulse.core.seed import SEED_ISSUES, SEED_SERVICES, seed_logs, seed_metrics

logger = get_logger(__name__)

_Step = Callable[[], Awaitable[int]]


@dataclass
class SeedReport:
    """Rows inserted per table by one initialization run.

    Tables that already had data map to 0.
    """

    inserted: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.inserted.values())


async def create_schema(store: StorePort) -> None:
    """Create the four dashboard tables if they do not exist.

    Raises:
        InitializationError: If any DDL statement fails.
    """
    for schema in (
        SQLiteMetricsStorage.schema,
        SQLiteLogStorage.schema,
        SQLiteIssueStorage.schema,
        SQLiteStatusStorage.schema,
    ):
        try:
            await store.execute(schema)
        except QueryError as e:
            raise InitializationError(f"Schema creation failed: {e.message}") from e


async def _seed_if_empty(
    table: str,
    count: Callable[[], Awaitable[int]],
    insert: Callable[[], Awaitable[int]],
) -> int:
    """Run insert only when count reports an empty table."""
    if await count() > 0:
        logger.debug("Table %s already populated, skipping seed", table)
        return 0
    inserted = await insert()
    logger.info("Seeded %d rows into %s", inserted, table)
    return inserted


async def initialize(store: StorePort, rng: random.Random | None = None) -> SeedReport:
    """Bring a fresh or existing database to a ready state.

    Creates the schema, then seeds every empty table. A table that already
    holds at least one row is left untouched, so running this any number of
    times inserts seed rows at most once per table.

    Tables are seeded independently: a failure in one table is logged and
    the remaining tables are still attempted.

    Args:
        store: An open store.
        rng: Random source for seed content. Defaults to a fresh
            ``random.Random``.

    Returns:
        SeedReport with the rows inserted per table.

    Raises:
        InitializationError: If schema creation fails, or after all tables
            were attempted if any of them failed to seed.
    """
    rng = rng or random.Random()
    await create_schema(store)

    logs = SQLiteLogStorage(store)
    issues = SQLiteIssueStorage(store)
    statuses = SQLiteStatusStorage(store)
    metrics = SQLiteMetricsStorage(store)

    plan: list[tuple[str, _Step, _Step]] = [
        (logs.table_name, logs.count, lambda: logs.write_many(seed_logs(rng))),
        (issues.table_name, issues.count, lambda: issues.write_many(SEED_ISSUES)),
        (
            statuses.table_name,
            statuses.count,
            lambda: statuses.write_many(SEED_SERVICES),
        ),
        (
            metrics.table_name,
            metrics.count,
            lambda: metrics.append_many(seed_metrics(rng)),
        ),
    ]

    report = SeedReport()
    failed: list[str] = []
    for table, count, insert in plan:
        try:
            report.inserted[table] = await _seed_if_empty(table, count, insert)
        except QueryError as e:
            logger.error("Seeding %s failed: %s", table, e.message)
            failed.append(table)

    if failed:
        raise InitializationError(
            f"Seeding failed for: {', '.join(failed)}", failed_tables=failed
        )
    return report
