"""
NoteKeeper Backend - Request Logging Middleware
================================================

What:  One access-log line per request, with timing and the signed-in user.
How:   Measures the time spent in the rest of the chain, then logs method,
       path, status, duration, request ID, client IP and username at a level
       chosen from the status class.
When:  After RequestIDMiddleware, so the request ID is already set.

Example line:
    PATCH /note/1 200 0.8ms [3f2a9c1d] from 127.0.0.1 user=alice

Never logged: request bodies (passwords, memo text) and cookies (session tokens).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.access")

QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Access logger.

    Levels:
        5xx → ERROR, 4xx → WARNING, everything else → INFO.

    The username comes from ``request.state.username``, which the identity
    dependency sets on authenticated routes; public routes log ``user=-``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        username = getattr(request.state, "username", None) or "-"

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s user=%s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            username,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "username": username,
            },
        )

        return response
