"""
Student Records API — Request ID Middleware
=============================================

What:  Tags every request with a correlation ID, echoed in X-Request-ID.
How:   A client-supplied ID is reused when it is short and made of safe
       characters; anything else is replaced by a fresh eight-character ID.
       The ID lives in a ContextVar so loggers and exception handlers can
       read it without the request object.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Echoed into headers and log lines, so no whitespace or control characters
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: str | None) -> str:
    """The client's ID if it is usable, otherwise a new one."""
    if supplied and _CLIENT_ID_PATTERN.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
