"""
Error handling for TableScope.

- ErrorHandlerMiddleware turns unhandled exceptions into a JSON 500 instead
  of a bare server error. Pure ASGI middleware, see request_logger.
- profiling_error_handler maps engine failures (EmptyDatasetError) to a 422
  with a user-facing message.
"""

import json
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from ..services.dataset_profiler import EmptyDatasetError, ProfilingError

logger = logging.getLogger("tablescope.middleware.error_handler")


async def profiling_error_handler(request: Request, exc: ProfilingError) -> JSONResponse:
    error = "empty_dataset" if isinstance(exc, EmptyDatasetError) else "profiling_error"
    logger.warning("%s on %s %s: %s", error, request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"error": error, "message": str(exc)})


class ErrorHandlerMiddleware:
    """Catches unhandled exceptions and returns a structured JSON error."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            path = scope.get("path", "unknown")
            method = scope.get("method", "unknown")
            request_id = scope.get("state", {}).get("request_id")
            logger.exception("Unhandled exception on %s %s [%s]: %s", method, path, request_id, exc)
            if response_started:
                # Headers already sent; nothing sensible left to write.
                raise

            body = json.dumps({
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again.",
                "path": path,
                "request_id": request_id,
            }).encode("utf-8")

            await send({
                "type": "http.response.start",
                "status": 500,
                "headers": [
                    [b"content-type", b"application/json"],
                    [b"content-length", str(len(body)).encode()],
                ],
            })
            await send({"type": "http.response.body", "body": body})
