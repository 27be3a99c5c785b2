"""Sample data used to populate an empty dashboard database."""

import random

from devpulse.core.models import CodeIssue, LogEntry, MetricSample, ServiceStatus

SEED_LOG_COUNT = 20
SEED_METRIC_COUNT = 10

LOG_LEVELS = ["info", "warning", "error", "debug"]

LOG_MESSAGES = [
    "Database connection established",
    "API request processed: /api/users",
    "Cache invalidation triggered",
    "WebSocket connection opened",
    "Authentication token validated",
    "Memory threshold warning: 75%",
    "Failed to resolve dependency",
    "Network timeout on external service",
    "Deployment pipeline initiated",
    "Background job completed successfully",
]

LOG_SOURCES = [
    "api/handlers.js",
    "utils/cache.js",
    "services/auth.js",
    "middleware/logger.js",
    "worker/queue.js",
]

SEED_ISSUES = [
    CodeIssue(
        title="N+1 query detected",
        file="api/handlers.js",
        line=124,
        severity="error",
        description="Optimize database queries",
    ),
    CodeIssue(
        title="Memory leak in event listener",
        file="utils/cache.js",
        line=87,
        severity="warning",
        description="Clean up event listeners properly",
    ),
    CodeIssue(
        title="Unhandled promise rejection",
        file="services/auth.js",
        line=203,
        severity="warning",
        description="Add .catch() handler",
    ),
    CodeIssue(
        title="Performance: 450ms response time",
        file="middleware/logger.js",
        line=56,
        severity="info",
        description="Consider optimization",
    ),
]

SEED_SERVICES = [
    ServiceStatus(service="API Server", status="online", uptime=99.9),
    ServiceStatus(service="Database", status="online", uptime=99.8),
    ServiceStatus(service="Cache Layer", status="online", uptime=100.0),
    ServiceStatus(service="Message Queue", status="online", uptime=99.5),
]


def seed_logs(rng: random.Random, count: int = SEED_LOG_COUNT) -> list[LogEntry]:
    """Generate random log entries from the fixed catalogs.

    Args:
        rng: Random source.
        count: Number of entries to generate.

    Returns:
        List of unsaved LogEntry objects.
    """
    return [
        LogEntry(
            level=rng.choice(LOG_LEVELS),
            message=rng.choice(LOG_MESSAGES),
            source=rng.choice(LOG_SOURCES),
            response_time=rng.randint(50, 549),
        )
        for _ in range(count)
    ]


def seed_metrics(
    rng: random.Random, count: int = SEED_METRIC_COUNT
) -> list[MetricSample]:
    """Generate random metric samples for the initial series.

    Args:
        rng: Random source.
        count: Number of samples to generate.

    Returns:
        List of unsaved MetricSample objects.
    """
    return [
        MetricSample(
            cpu=rng.uniform(20, 90),
            memory=rng.uniform(40, 90),
            requests=rng.randint(0, 1999),
            errors=rng.randint(0, 14),
        )
        for _ in range(count)
    ]
