"""devpulse: a simulated monitoring dashboard backend.

Seeds a SQLite database with sample metrics, logs, code issues and service
statuses, and serves them over a small JSON API that drifts values on each
read to mimic a live system.
"""

from devpulse.adapters.logging import configure_logging, get_logger
from devpulse.adapters.storage import SQLiteStore, initialize
from devpulse.app import create_app
from devpulse.config import Settings
from devpulse.core.drift import (
    DEFAULT_METRICS,
    MetricStep,
    draw_metric_step,
    next_metrics,
    next_uptime,
)
from devpulse.core.errors import (
    DevpulseError,
    InitializationError,
    QueryError,
    StoreUnavailable,
    ValidationError,
)
from devpulse.core.models import (
    CodeIssue,
    DashboardSummary,
    LogEntry,
    MetricSample,
    ServiceStatus,
)

__all__ = [
    "DEFAULT_METRICS",
    "CodeIssue",
    "DashboardSummary",
    "DevpulseError",
    "InitializationError",
    "LogEntry",
    "MetricSample",
    "MetricStep",
    "QueryError",
    "SQLiteStore",
    "ServiceStatus",
    "Settings",
    "StoreUnavailable",
    "ValidationError",
    "configure_logging",
    "create_app",
    "draw_metric_step",
    "get_logger",
    "initialize",
    "next_metrics",
    "next_uptime",
]
