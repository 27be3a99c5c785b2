"""FastAPI adapter exposing the dashboard endpoints."""

import random
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field

from devpulse.adapters.logging import get_logger
from devpulse.adapters.storage.sqlite_issues import SQLiteIssueStorage
from devpulse.adapters.storage.sqlite_logs import SQLiteLogStorage
from devpulse.adapters.storage.sqlite_metrics import SQLiteMetricsStorage
from devpulse.adapters.storage.sqlite_status import SQLiteStatusStorage
from devpulse.core.drift import DEFAULT_METRICS, draw_metric_step, next_uptime
from devpulse.core.models import CodeIssue, LogEntry, MetricSample
from devpulse.core.ports import StorePort

MAX_LOG_LIMIT = 1000

logger = get_logger(__name__)


class LogCreate(BaseModel):
    """Body of ``POST /api/logs``."""

    model_config = ConfigDict(populate_by_name=True)

    level: str = Field(min_length=1)
    message: str
    source: str
    response_time: int = Field(alias="responseTime", ge=0)


def _metrics_payload(sample: MetricSample) -> dict[str, Any]:
    return {
        "cpu": sample.cpu,
        "memory": sample.memory,
        "requests": sample.requests,
        "errors": sample.errors,
    }


def _log_payload(entry: LogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "timestamp": entry.timestamp,
        "level": entry.level,
        "message": entry.message,
        "source": entry.source,
        "responseTime": entry.response_time,
    }


def _issue_payload(issue: CodeIssue) -> dict[str, Any]:
    return {
        "id": issue.id,
        "title": issue.title,
        "file": issue.file,
        "line": issue.line,
        "severity": issue.severity,
        "description": issue.description,
        "resolved": issue.resolved,
    }


def _utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_dashboard_router(
    store: StorePort,
    rng: random.Random,
    default_log_limit: int = 30,
) -> APIRouter:
    """Create a FastAPI router with the /api dashboard endpoints.

    Args:
        store: Store shared by every endpoint. It only needs to be open by
            the time requests arrive.
        rng: Random source for drift.
        default_log_limit: Number of logs returned when ``limit`` is absent.

    Returns:
        APIRouter with the dashboard endpoints configured.
    """
    router = APIRouter(prefix="/api")
    metrics = SQLiteMetricsStorage(store)
    logs = SQLiteLogStorage(store)
    issues = SQLiteIssueStorage(store)
    statuses = SQLiteStatusStorage(store)

    @router.get("/metrics")
    async def get_metrics() -> dict[str, Any]:
        """Return the next drifted sample and append it to the series.

        With no stored samples the fixed default is returned and nothing is
        written.
        """
        sample = await metrics.append_drifted(draw_metric_step(rng))
        if sample is None:
            return _metrics_payload(DEFAULT_METRICS)
        return _metrics_payload(sample)

    @router.get("/logs")
    async def get_logs(
        limit: int = Query(default=default_log_limit, ge=1, le=MAX_LOG_LIMIT),
    ) -> list[dict[str, Any]]:
        """Return the most recent logs, newest first."""
        return [_log_payload(e) for e in await logs.recent(limit)]

    @router.post("/logs")
    async def create_log(body: LogCreate) -> dict[str, Any]:
        """Insert one log entry and return it with its generated id."""
        stored = await logs.write(
            LogEntry(
                level=body.level,
                message=body.message,
                source=body.source,
                response_time=body.response_time,
            )
        )
        logger.debug("Created log %s", stored.id)
        return _log_payload(stored)

    @router.get("/code-issues")
    async def get_code_issues() -> list[dict[str, Any]]:
        """Return every unresolved code issue."""
        return [_issue_payload(i) for i in await issues.unresolved()]

    @router.get("/system-status")
    async def get_system_status() -> list[dict[str, Any]]:
        """Return service statuses with a drifted uptime.

        The drifted value is never written back.
        """
        result = []
        for status in await statuses.all():
            drifted = replace(status, uptime=next_uptime(status.uptime, rng))
            result.append(
                {
                    "service": drifted.service,
                    "status": drifted.status,
                    "uptime": drifted.uptime,
                }
            )
        return result

    @router.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok", "timestamp": _utc_now_iso()}

    @router.get("/summary")
    async def get_summary() -> dict[str, Any]:
        """Return aggregates over every stored metric and error log."""
        summary = await metrics.summary()
        return {
            "totalRequests": summary.total_requests,
            "totalErrors": summary.total_errors,
            "avgCPU": summary.avg_cpu,
            "avgMemory": summary.avg_memory,
        }

    return router
