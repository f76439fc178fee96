"""
Jokebox — Access Log Middleware
================================

What:  One log line per HTTP request naming the operation that served it.
When:  Runs inside RequestIDMiddleware, so the formatter's [request_id]
       field is filled in.

Log line:
    create_joke POST /jokes -> 201 in 4.2ms

The operation is the route's name (list_jokes, create_joke, upload_file,
hello_world...). Requests that match no route are logged under their path.

Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies and uploaded file contents are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("jokebox.access")

# Polled by liveness checks every few seconds
QUIET_OPERATIONS = frozenset({"health_check"})


def operation_name(request: Request) -> str:
    """Name of the route that handled `request`, or its path if none matched."""
    route = request.scope.get("route")
    name = getattr(route, "name", None)
    if name:
        return name
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", None) or request.url.path


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log line once the response is ready."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # The router fills in scope["route"] during call_next
        operation = operation_name(request)
        if operation in QUIET_OPERATIONS and response.status_code < 400:
            return response

        logger.log(
            level_for_status(response.status_code),
            "%s %s %s -> %d in %.1fms",
            operation,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            extra={
                "operation": operation,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
