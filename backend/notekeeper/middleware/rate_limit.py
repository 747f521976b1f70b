"""
NoteKeeper Backend - Credential Endpoint Rate Limiting
=======================================================

What:  Per-IP sliding window limit on sign-up and sign-in.
How:   Keeps the timestamps of recent credential requests per client IP in
       memory; once an IP has used its quota inside the window, further
       attempts get 429 until the oldest timestamp leaves the window.
When:  Inside the request ID and access log layers, before any password
       hashing happens.

Algorithm: Sliding Window Log
    1. Drop timestamps older than ``auth_rate_limit_window`` seconds
    2. If ``auth_rate_limit_requests`` remain, reject with Retry-After
    3. Otherwise record now and let the request through

Only the credential endpoints are limited. Memo routes already require a
session, and the public memo list is cheap to serve.

State is per process, like every other store in this service.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, FrozenSet, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notekeeper.config import settings
from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

LIMITED_PATHS: FrozenSet[str] = frozenset({"/user/sign-up", "/user/sign-in"})

# Full sweep of idle IPs every this many recorded attempts
CLEANUP_EVERY = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window limiter for credential endpoints.

    Response on limit:
        HTTP 429, ``Retry-After`` header, JSON error body in the same shape
        as the global exception handlers produce.
    """

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._attempts: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path not in LIMITED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window = settings.auth_rate_limit_window
        window_start = now - window

        recent = [ts for ts in self._attempts[client_ip] if ts > window_start]
        self._attempts[client_ip] = recent

        if len(recent) >= settings.auth_rate_limit_requests:
            retry_after = int(recent[0] + window - now) + 1
            logger.warning(
                "Credential rate limit hit for IP %s on %s: %d attempts in %ds",
                client_ip,
                request.url.path,
                len(recent),
                window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": "rate_limit_exceeded",
                    "message": f"Too many attempts. Please wait {retry_after} seconds before retrying.",
                    "details": {"retry_after": retry_after},
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        recent.append(now)
        self._recorded += 1
        if self._recorded % CLEANUP_EVERY == 0:
            self._cleanup_idle_ips(window_start)

        return await call_next(request)

    def _cleanup_idle_ips(self, window_start: float) -> None:
        """Forget IPs whose every attempt is older than the window."""
        idle = [
            ip for ip, timestamps in self._attempts.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in idle:
            del self._attempts[ip]

        if idle:
            logger.debug("Cleaned up %d idle IP entries", len(idle))
