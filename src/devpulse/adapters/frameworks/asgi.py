"""ASGI request logging middleware.

Framework-agnostic: wraps any ASGI application, so it works the same under
FastAPI, Starlette or a bare ASGI callable.
"""

import json
import time
import uuid
from collections.abc import Callable, Coroutine
from typing import Any

from devpulse.adapters.logging import get_logger, level_for_status, log_exception

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

INTERNAL_ERROR_BODY = {"error": "Internal server error"}

logger = get_logger(__name__)


def _extract_request_id(scope: Scope, header_name: str = "X-Request-ID") -> str:
    """Extract or generate a request ID from ASGI scope headers.

    Searches for the specified header (case-insensitive). If not found,
    generates a new UUID.

    Args:
        scope: ASGI scope dictionary containing request metadata.
        header_name: Name of the header to search for.

    Returns:
        Request ID string (either from header or newly generated UUID).
    """
    header_bytes = header_name.lower().encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    for name, value in headers:
        if name.lower() == header_bytes:
            return str(value.decode("utf-8", errors="replace"))
    return str(uuid.uuid4())


async def _send_json(send: Send, status: int, payload: dict[str, Any]) -> None:
    """Send a complete JSON response."""
    body = json.dumps(payload).encode()
    headers = [
        (b"content-type", b"application/json"),
        (b"content-length", str(len(body)).encode()),
    ]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body})


class RequestLoggingMiddleware:
    """ASGI middleware that logs every HTTP request and contains failures.

    For each request it:

    - takes the request ID from the configured header or generates one, and
      echoes it on the response
    - logs method, path, status and duration at a level chosen from the
      status code
    - turns an exception escaping the wrapped app into a 500 JSON response,
      provided the response has not started yet
    """

    def __init__(self, app: ASGIApp, request_id_header: str = "X-Request-ID") -> None:
        self.app = app
        self.request_id_header = request_id_header

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        request_id = _extract_request_id(scope, self.request_id_header)
        header_pair = (self.request_id_header.lower().encode(), request_id.encode())
        captured: dict[str, Any] = {"status": None, "started": False}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
                captured["started"] = True
                message = {
                    **message,
                    "headers": [*message.get("headers", []), header_pair],
                }
            await send(message)

        try:
            await self.app(scope, receive, wrapped_send)
        except Exception:
            log_exception(
                f"Unhandled error on {scope['method']} {scope['path']}", logger
            )
            if captured["started"]:
                raise
            await _send_json(wrapped_send, 500, INTERNAL_ERROR_BODY)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = captured["status"] or 0
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms request_id=%s",
            scope["method"],
            scope["path"],
            status,
            duration_ms,
            request_id,
        )
