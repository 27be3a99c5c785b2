"""Core domain models for dashboard data."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricSample:
    """One point of the simulated system metrics series.

    Attributes:
        cpu: CPU utilisation percent.
        memory: Memory utilisation percent.
        requests: Cumulative request count; never decreases.
        errors: Error count; never negative.
        id: Row id, None until persisted.
        timestamp: Insertion time as stored by SQLite.
    """

    cpu: float
    memory: float
    requests: int
    errors: int
    id: int | None = None
    timestamp: str | None = None


@dataclass(frozen=True)
class LogEntry:
    """A dashboard log line.

    Attributes:
        level: Log level (info, warning, error, debug). Not enforced.
        message: The log message.
        source: File or component that produced the line.
        response_time: Response time in milliseconds.
        id: Row id, None until persisted.
        timestamp: Insertion time as stored by SQLite.
    """

    level: str
    message: str
    source: str
    response_time: int
    id: int | None = None
    timestamp: str | None = None


@dataclass(frozen=True)
class CodeIssue:
    """A static-analysis style finding shown on the dashboard."""

    title: str
    file: str
    line: int
    severity: str
    description: str
    resolved: bool = False
    id: int | None = None


@dataclass(frozen=True)
class ServiceStatus:
    """Health of one named service.

    Attributes:
        service: Unique service name.
        status: Free text status, e.g. "online".
        uptime: Uptime percentage in [0, 100].
        id: Row id, None until persisted.
        last_checked: Insertion time as stored by SQLite.
    """

    service: str
    status: str
    uptime: float
    id: int | None = None
    last_checked: str | None = None


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregates over every stored metric and log row."""

    total_requests: int
    total_errors: int
    avg_cpu: float
    avg_memory: float
