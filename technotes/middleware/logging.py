"""
TechNotes Backend — Request Logging Middleware
================================================

What:  One log line per HTTP request: method, path, status, duration, request id.
How:   Measures time around call_next and picks the level from the status code.

What we log vs what we DON'T log:
    Log: method, path, status, duration, client IP, request ID
    Don't log: request bodies (they contain passwords on /users)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from technotes.middleware.request_id import request_id_var

logger = logging.getLogger("technotes.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request after the response is produced.

    Level by status:
        5xx → ERROR
        4xx → WARNING (rejected input, conflicts, empty lists)
        else → INFO
    Health checks are skipped; probes hit them every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
