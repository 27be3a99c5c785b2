"""Tests for the ASGI request logging middleware."""

import json
import logging

import pytest

from devpulse.adapters.frameworks.asgi import (
    RequestLoggingMiddleware,
    _extract_request_id,
)

pytestmark = [pytest.mark.asgi, pytest.mark.tier(1)]


async def _receive():
    return {"type": "http.request", "body": b""}


def _headers(message: dict) -> dict[bytes, bytes]:
    return dict(message["headers"])


class TestExtractRequestId:
    """Tests for _extract_request_id()."""

    def test_reads_header_case_insensitively(self, asgi_scope) -> None:
        scope = asgi_scope()
        scope["headers"] = [(b"X-Request-Id", b"abc-123")]

        assert _extract_request_id(scope) == "abc-123"

    def test_generates_uuid_when_missing(self, asgi_scope) -> None:
        request_id = _extract_request_id(asgi_scope())

        assert len(request_id) == 36
        assert request_id.count("-") == 4


class TestRequestLoggingMiddleware:
    """Tests for RequestLoggingMiddleware."""

    async def test_passes_response_through_and_echoes_request_id(
        self, basic_asgi_app, asgi_scope, asgi_send_capture
    ) -> None:
        send, responses = asgi_send_capture
        scope = asgi_scope()
        scope["headers"] = [(b"x-request-id", b"req-1")]

        await RequestLoggingMiddleware(basic_asgi_app)(scope, _receive, send)

        assert responses[0]["status"] == 200
        assert _headers(responses[0])[b"x-request-id"] == b"req-1"
        assert responses[1]["body"] == b"OK"

    async def test_logs_request_line(
        self, basic_asgi_app, asgi_scope, asgi_send_capture, caplog
    ) -> None:
        send, _responses = asgi_send_capture

        with caplog.at_level(logging.INFO, logger="devpulse"):
            await RequestLoggingMiddleware(basic_asgi_app)(
                asgi_scope(path="/api/health"), _receive, send
            )

        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("GET /api/health 200") for m in messages)

    async def test_unhandled_exception_becomes_500(
        self, asgi_scope, asgi_send_capture, caplog
    ) -> None:
        async def failing_app(scope, receive, send) -> None:
            raise RuntimeError("kaboom")

        send, responses = asgi_send_capture

        with caplog.at_level(logging.INFO, logger="devpulse"):
            await RequestLoggingMiddleware(failing_app)(asgi_scope(), _receive, send)

        assert responses[0]["status"] == 500
        assert json.loads(responses[1]["body"]) == {"error": "Internal server error"}
        error_records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert any(r.exc_info for r in error_records)

    async def test_exception_after_response_started_is_reraised(
        self, asgi_scope, asgi_send_capture
    ) -> None:
        async def half_app(scope, receive, send) -> None:
            await send({"type": "http.response.start", "status": 200, "headers": []})
            raise RuntimeError("mid-stream")

        send, _responses = asgi_send_capture

        with pytest.raises(RuntimeError, match="mid-stream"):
            await RequestLoggingMiddleware(half_app)(asgi_scope(), _receive, send)

    async def test_non_http_scopes_pass_through(self, asgi_send_capture) -> None:
        seen = []

        async def app(scope, receive, send) -> None:
            seen.append(scope["type"])

        send, _responses = asgi_send_capture

        await RequestLoggingMiddleware(app)({"type": "lifespan"}, _receive, send)

        assert seen == ["lifespan"]
