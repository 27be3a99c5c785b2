"""SQLite storage adapter for code issues."""

from collections.abc import Iterable

from devpulse.core.models import CodeIssue
from devpulse.core.ports import Row, StorePort

ISSUES_SCHEMA = """
CREATE TABLE IF NOT EXISTS code_issues (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    file TEXT,
    line INTEGER,
    severity TEXT,
    description TEXT,
    resolved BOOLEAN DEFAULT 0
)
"""

_INSERT_ISSUE = """
INSERT INTO code_issues (title, file, line, severity, description)
VALUES (?, ?, ?, ?, ?)
"""

_SELECT_OPEN_ISSUES = """
SELECT id, title, file, line, severity, description, resolved
FROM code_issues
WHERE resolved = 0
ORDER BY id ASC
"""

_COUNT_ISSUES = """
SELECT COUNT(*) AS count FROM code_issues
"""


def _from_row(row: Row) -> CodeIssue:
    return CodeIssue(
        id=row["id"],
        title=row["title"],
        file=row["file"],
        line=row["line"],
        severity=row["severity"],
        description=row["description"],
        resolved=bool(row["resolved"]),
    )


class SQLiteIssueStorage:
    """Code issues stored in the ``code_issues`` table."""

    table_name = "code_issues"
    schema = ISSUES_SCHEMA

    def __init__(self, store: StorePort) -> None:
        self._store = store

    async def write_many(self, issues: Iterable[CodeIssue]) -> int:
        """Insert several issues in one batch. New issues are unresolved."""
        return await self._store.execute_many(
            _INSERT_ISSUE,
            [(i.title, i.file, i.line, i.severity, i.description) for i in issues],
        )

    async def unresolved(self) -> list[CodeIssue]:
        """Return every issue with resolved = false."""
        rows = await self._store.query_all(_SELECT_OPEN_ISSUES)
        return [_from_row(row) for row in rows]

    async def count(self) -> int:
        """Return total number of issues, resolved or not."""
        row = await self._store.query_one(_COUNT_ISSUES)
        return row["count"] if row else 0
