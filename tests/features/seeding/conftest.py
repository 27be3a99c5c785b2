"""Step definitions for the seeding scenarios."""

import asyncio
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from devpulse.adapters.storage.initializer import create_schema, initialize
from devpulse.adapters.storage.sqlite_base import SQLiteStore


@dataclass
class SeedingContext:
    """Shared state between steps in a seeding scenario."""

    db_path: str = ""
    runs: int = 0


def run_async(coro: Any) -> Any:
    """Run a coroutine synchronously."""
    return asyncio.run(coro)


async def _with_store(db_path: str, action) -> Any:
    async with SQLiteStore(db_path) as store:
        return await action(store)


@pytest.fixture
def ctx() -> SeedingContext:
    """Fresh scenario context for each test."""
    return SeedingContext()


@given("an empty database file")
def step_empty_database(ctx: SeedingContext, tmp_path: Path) -> None:
    ctx.db_path = str(tmp_path / "seeding.db")


@given(parsers.parse('the "system_status" table already holds the service "{name}"'))
def step_existing_service(ctx: SeedingContext, name: str) -> None:
    async def action(store: SQLiteStore) -> None:
        await create_schema(store)
        await store.execute(
            "INSERT INTO system_status (service, status, uptime) VALUES (?, ?, ?)",
            (name, "online", 50.0),
        )

    run_async(_with_store(ctx.db_path, action))


@when("the database is initialized")
def step_initialize(ctx: SeedingContext) -> None:
    ctx.runs += 1
    rng = random.Random(ctx.runs)
    run_async(_with_store(ctx.db_path, lambda store: initialize(store, rng)))


@then(parsers.parse('the "{table}" table holds {count:d} rows'))
def step_table_count(ctx: SeedingContext, table: str, count: int) -> None:
    async def action(store: SQLiteStore) -> int:
        row = await store.query_one(f"SELECT COUNT(*) AS n FROM {table}")
        return row["n"] if row else 0

    assert run_async(_with_store(ctx.db_path, action)) == count


@then("every service name is unique")
def step_unique_services(ctx: SeedingContext) -> None:
    async def action(store: SQLiteStore) -> list[str]:
        rows = await store.query_all("SELECT service FROM system_status")
        return [row["service"] for row in rows]

    names = run_async(_with_store(ctx.db_path, action))
    assert len(names) == len(set(names))
