"""
Request logging middleware for TableScope.

Tags every request with an id, logs method, path, status code and duration,
and returns the id and timing as response headers.

Pure ASGI middleware (not BaseHTTPMiddleware) so it can be stacked with the
error handler without buffering response bodies.
"""

import logging
import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("tablescope.middleware.request_logger")

REQUEST_ID_HEADER = b"x-request-id"


def _incoming_request_id(scope: Scope) -> str:
    for name, value in scope.get("headers", []):
        if name == REQUEST_ID_HEADER:
            return value.decode("latin-1")[:64]
    return uuid.uuid4().hex


class RequestLoggerMiddleware:
    """Logs one line per HTTP request and echoes an x-request-id header."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope)
        scope.setdefault("state", {})["request_id"] = request_id
        start_time = time.perf_counter()
        status_code = 0

        async def send_wrapper(message: Message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
                duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append([b"x-response-time-ms", str(duration_ms).encode()])
                headers.append([REQUEST_ID_HEADER, request_id.encode("latin-1")])
                message = {**message, "headers": headers}
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    "[%s] %s %s -> %s (%.2fms)",
                    request_id, scope.get("method", "?"), scope.get("path", "?"),
                    status_code, duration_ms,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
