"""
Food Ordering Backend — Auth Rate Limiting Middleware
=======================================================

What:  Per-IP sliding-window limit on the credential endpoints
       (POST /api/login, POST /api/register).
How:   Keeps a list of recent request timestamps per client IP. Entries
       older than the window are dropped on each request; once the
       remaining count reaches the limit the request is answered with 429
       and a Retry-After header without reaching the route.

Limits come from settings.auth_rate_limit_requests and
settings.auth_rate_limit_window (seconds), read on every request.

State is in-process: each worker process enforces its own limit.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from food_ordering.config import settings
from food_ordering.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

LIMITED_ROUTES = {
    ("POST", "/api/login"),
    ("POST", "/api/register"),
}

# Drop idle IPs once this many are tracked
CLEANUP_THRESHOLD = 1000


class AuthRateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if (request.method, request.url.path) not in LIMITED_ROUTES:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        window = settings.auth_rate_limit_window
        limit = settings.auth_rate_limit_requests
        now = time.time()
        window_start = now - window

        recent = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = recent

        if len(recent) >= limit:
            retry_after = int(recent[0] + window - now) + 1
            logger.warning(
                "Auth rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(recent),
                window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": f"Too many attempts. Please wait {retry_after} seconds before retrying.",
                    "requestId": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        recent.append(now)

        if len(self._requests) > CLEANUP_THRESHOLD:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]
        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
