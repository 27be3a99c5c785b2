"""SQLite store shared by every storage adapter."""

import asyncio
import sqlite3
from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Any

import aiosqlite

from devpulse.adapters.logging import get_logger
from devpulse.core.errors import QueryError, StoreUnavailable
from devpulse.core.ports import Row

logger = get_logger(__name__)


class SQLiteStore:
    """Process-wide aiosqlite connection implementing StorePort.

    A single connection is kept open for the lifetime of the store. aiosqlite
    runs every statement on one worker thread, so statements issued by
    concurrent requests are serialized by the connection itself. Each
    statement is committed on its own; there are no cross-statement
    transactions.

    ``close()`` waits for statements that are already running before
    releasing the connection. Statements issued after close has started
    raise StoreUnavailable.

    Example:
        ```python
        async with SQLiteStore("dashboard.db") as store:
            rows = await store.query_all("SELECT * FROM logs")
        ```
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        self._closing = False
        self._in_flight = 0
        self._idle: asyncio.Event | None = None

    @property
    def db_path(self) -> str:
        """Path of the backing database file."""
        return self._db_path

    @property
    def is_open(self) -> bool:
        """Return True while the store accepts statements."""
        return self._conn is not None and not self._closing

    def _get_idle_event(self) -> asyncio.Event:
        """Get or create the idle event (lazy to avoid event loop issues)."""
        if self._idle is None:
            self._idle = asyncio.Event()
            self._idle.set()
        return self._idle

    async def open(self) -> None:
        """Open or create the database.

        Raises:
            StoreUnavailable: If the path is unwritable or not a database.
        """
        if self._conn is not None:
            return
        try:
            conn = await aiosqlite.connect(self._db_path)
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailable(
                f"Cannot open database {self._db_path}: {e}"
            ) from e
        conn.row_factory = aiosqlite.Row
        try:
            if self._db_path != ":memory:":
                await conn.execute("PRAGMA journal_mode=WAL")
            else:
                await conn.execute("SELECT 1")
        except sqlite3.Error as e:
            await conn.close()
            raise StoreUnavailable(
                f"Cannot open database {self._db_path}: {e}"
            ) from e
        self._conn = conn
        self._closing = False
        logger.info("Opened database %s", self._db_path)

    async def close(self) -> None:
        """Drain in-flight statements, then close the connection."""
        if self._conn is None:
            return
        self._closing = True
        await self._get_idle_event().wait()
        await self._conn.close()
        self._conn = None
        self._closing = False
        logger.info("Database connection closed")

    async def __aenter__(self) -> "SQLiteStore":
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @asynccontextmanager
    async def _statement(self) -> AsyncIterator[aiosqlite.Connection]:
        """Track one statement as in flight for the duration of the block."""
        if self._conn is None or self._closing:
            raise StoreUnavailable(f"Database {self._db_path} is not open")
        idle = self._get_idle_event()
        self._in_flight += 1
        idle.clear()
        try:
            yield self._conn
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                idle.set()

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int | None:
        """Run one statement and commit.

        Returns:
            The cursor's lastrowid.

        Raises:
            QueryError: On constraint violation or malformed SQL.
        """
        async with self._statement() as db:
            try:
                cursor = await db.execute(sql, tuple(params))
                await db.commit()
            except sqlite3.Error as e:
                await db.rollback()
                raise QueryError(str(e)) from e
            row_id = cursor.lastrowid
            await cursor.close()
            return row_id

    async def execute_returning(
        self, sql: str, params: Sequence[Any] = ()
    ) -> Row | None:
        """Run one statement with a RETURNING clause and commit.

        Returns:
            The first returned row as a dict, or None if no row was written.

        Raises:
            QueryError: On constraint violation or malformed SQL.
        """
        async with self._statement() as db:
            try:
                async with db.execute(sql, tuple(params)) as cursor:
                    rows = await cursor.fetchall()
                await db.commit()
            except sqlite3.Error as e:
                await db.rollback()
                raise QueryError(str(e)) from e
            return dict(rows[0]) if rows else None

    async def execute_many(self, sql: str, rows: Iterable[Sequence[Any]]) -> int:
        """Run one statement for every parameter tuple, committing once.

        Returns:
            Number of rows affected.

        Raises:
            QueryError: If any row fails; the whole batch is rolled back.
        """
        async with self._statement() as db:
            try:
                cursor = await db.executemany(sql, [tuple(r) for r in rows])
                await db.commit()
            except sqlite3.Error as e:
                await db.rollback()
                raise QueryError(str(e)) from e
            affected = cursor.rowcount
            await cursor.close()
            return affected

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Row | None:
        """Return the first row of a query as a dict, or None."""
        async with self._statement() as db:
            try:
                async with db.execute(sql, tuple(params)) as cursor:
                    row = await cursor.fetchone()
            except sqlite3.Error as e:
                raise QueryError(str(e)) from e
            return dict(row) if row is not None else None

    async def query_all(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        """Return every row of a query as a list of dicts."""
        async with self._statement() as db:
            try:
                async with db.execute(sql, tuple(params)) as cursor:
                    rows = await cursor.fetchall()
            except sqlite3.Error as e:
                raise QueryError(str(e)) from e
            return [dict(row) for row in rows]
