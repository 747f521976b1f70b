"""
NoteKeeper Backend - Request ID Middleware
===========================================

What:  Gives every request a short correlation ID and echoes it in the response.
How:   Reuses a client-sent X-Request-ID or generates one, stores it in a
       ContextVar (for loggers and error handlers) and on request.state
       (for route handlers), then sets the X-Request-ID response header.
When:  Runs before the access logger so every log line of a request shares it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_CLIENT_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns ``request.state.request_id`` and the X-Request-ID header.

    Client-provided IDs longer than MAX_CLIENT_ID_LENGTH are replaced, so a
    caller cannot push arbitrarily long strings into the logs.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", "")
        if not rid or len(rid) > MAX_CLIENT_ID_LENGTH:
            rid = uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
