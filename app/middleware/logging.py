"""
Student Records API — Access Logging Middleware
=================================================

What:  One line per request, keyed by route template rather than raw path,
       so `GET /students/{student_id}` aggregates across ids while the
       concrete id is still available as the `student_id` field.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Student names and ages are personal data: request and response bodies are
never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

access_logger = logging.getLogger("student_records.access")

SILENT_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """The matched route's path template, or the raw path when nothing matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        route = route_template(request)
        student_id = request.scope.get("path_params", {}).get("student_id")
        rid = request_id_var.get("")

        access_logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s]",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "student_id": student_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
