# =============================================================================
# app/rate_limit.py - Fixed-Window Rate Limiting
# =============================================================================
# Per-client request ceilings, counted in memory per process.
#
# Two limiters are installed by create_app():
# - "api":    every /api/* request (300 per 15 minutes by default)
# - "submit": POST /api/scores only (5 per minute by default)
#
# Limits are checked in middleware, before routing and before the request
# body is read, so malformed payloads are counted like any other request.
#
# Usage:
#   app.add_middleware(RateLimitMiddleware, limiters=build_rate_limiters(settings))
# =============================================================================

import logging
import math
import threading
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.config import Settings
from app.exceptions import RateLimitExceededError, leaderboard_exception_handler

logger = logging.getLogger(__name__)

# Sweep expired windows once the table grows past this many clients
PRUNE_THRESHOLD = 10_000


class FixedWindowRateLimiter:
    """
    Counts hits per key inside fixed windows.

    A key's window starts at its first hit and lasts window_seconds; the
    counter resets when the window ends.
    """

    def __init__(self, limit: int, window_seconds: float, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> None:
        """
        Record one request for key.

        Raises:
            RateLimitExceededError: If key is over the limit in this window
        """
        now = self._clock()
        with self._lock:
            if len(self._windows) > PRUNE_THRESHOLD:
                self._prune(now)

            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0

            count += 1
            self._windows[key] = (started, count)

        if count > self.limit:
            retry_after = max(1, math.ceil(started + self.window_seconds - now))
            raise RateLimitExceededError(retry_after=retry_after)

    def _prune(self, now: float) -> None:
        expired = [
            key for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


def build_rate_limiters(settings: Settings) -> dict[str, FixedWindowRateLimiter]:
    """Create the limiters for one application instance."""
    return {
        "api": FixedWindowRateLimiter(
            settings.API_RATE_LIMIT, settings.API_RATE_WINDOW_SECONDS
        ),
        "submit": FixedWindowRateLimiter(
            settings.SUBMIT_RATE_LIMIT, settings.SUBMIT_RATE_WINDOW_SECONDS
        ),
    }


def client_key(request: Request) -> str:
    """Identify the caller by IP address."""
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Charge each request against the limiters that cover it.

    - every /api/* request counts toward "api"
    - POST /api/scores also counts toward "submit"

    Over-limit requests get a 429 without reaching the route.
    """

    SUBMIT_PATH = "/api/scores"

    def __init__(self, app: ASGIApp, limiters: dict[str, FixedWindowRateLimiter]):
        super().__init__(app)
        self.limiters = limiters

    def limiter_names(self, request: Request) -> list[str]:
        path = request.url.path
        if not path.startswith("/api/"):
            return []
        if request.method == "POST" and path.rstrip("/") == self.SUBMIT_PATH:
            return ["api", "submit"]
        return ["api"]

    async def dispatch(self, request: Request, call_next):
        key = client_key(request)
        for name in self.limiter_names(request):
            try:
                self.limiters[name].hit(key)
            except RateLimitExceededError as exc:
                logger.warning(f"Rate limit '{name}' exceeded by {key} on {request.url.path}")
                return await leaderboard_exception_handler(request, exc)
        return await call_next(request)
