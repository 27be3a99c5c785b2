"""Port interface for the relational store.

Storage adapters and the initializer depend only on this protocol, so a
different SQL backend can be dropped in without touching them.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

Row = dict[str, Any]


@runtime_checkable
class StorePort(Protocol):
    """Port for parameterized SQL access."""

    async def open(self) -> None:
        """Open or create the backing database."""
        ...

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int | None:
        """Run one statement and commit.

        Returns:
            The last inserted row id, if any.
        """
        ...

    async def execute_returning(
        self, sql: str, params: Sequence[Any] = ()
    ) -> Row | None:
        """Run one statement with a RETURNING clause and commit.

        Returns:
            The first returned row, or None if nothing was written.
        """
        ...

    async def execute_many(self, sql: str, rows: Iterable[Sequence[Any]]) -> int:
        """Run one statement for each parameter tuple and commit once.

        Returns:
            Number of rows affected.
        """
        ...

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Row | None:
        """Return the first row of a query, or None."""
        ...

    async def query_all(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        """Return every row of a query."""
        ...

    async def close(self) -> None:
        """Release the database once in-flight statements have finished."""
        ...
