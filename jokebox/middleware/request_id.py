"""
Jokebox — Request ID Middleware
================================

What:  Assigns an ID to each incoming request and returns it in X-Request-ID.
Why:   Every log line written while serving a request carries the ID, so one
       failed joke insert can be traced from access log to store error.
How:   A client-supplied X-Request-ID is reused when it is short and made of
       safe characters; otherwise a short UUID is generated. The ID lives in
       a ContextVar that RequestIDLogFilter copies onto every log record.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up in log lines, so only a conservative shape is accepted
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: str) -> str:
    """Returns the client's ID if it is well-formed, else a fresh one."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """
    Sets `record.request_id` on every record passing through a handler.

    Records logged outside a request (startup, seeding) get "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request/response pair with an ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
