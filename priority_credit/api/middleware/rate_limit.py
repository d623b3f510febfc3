"""
Rate limiting for block submission, per client IP.

Only POST /blocks is limited; read-only queries are not.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from priority_credit.api.deps import get_client_ip
from priority_credit.config import get_settings

WINDOW_SECONDS = 60


class InMemoryRateLimitStore:
    """Fixed-window in-memory store. Key -> (count, window_start_ts)."""

    def __init__(self):
        self._data: Dict[str, Tuple[int, float]] = {}

    def check_and_incr(self, identifier: str, limit: int, window_seconds: int) -> bool:
        """Returns True if under limit (and increments). False if over limit (no increment)."""
        now = time.monotonic()
        entry = self._data.get(identifier)
        if entry is None or now - entry[1] >= window_seconds:
            self._data[identifier] = (1, now)
            return True
        count, start = entry
        if count >= limit:
            return False
        self._data[identifier] = (count + 1, start)
        return True

    def cleanup_old(self, max_age_seconds: int = 3600):
        """Remove entries older than max_age_seconds to avoid unbounded growth."""
        now = time.monotonic()
        stale = [k for k, (_, start) in self._data.items() if now - start > max_age_seconds]
        for k in stale:
            self._data.pop(k, None)


# Module-level store (single process)
_store: Optional[InMemoryRateLimitStore] = None


def get_store() -> InMemoryRateLimitStore:
    global _store
    if _store is None:
        _store = InMemoryRateLimitStore()
    return _store


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limit block submissions to rate_limit_blocks_per_minute per client IP."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return await call_next(request)

        if request.method != "POST" or request.url.path != f"{settings.api_v1_prefix}/blocks":
            return await call_next(request)

        store = get_store()
        store.cleanup_old(max_age_seconds=7200)

        identifier = get_client_ip(request) or "unknown"
        if not store.check_and_incr(identifier, settings.rate_limit_blocks_per_minute, WINDOW_SECONDS):
            return Response(
                content='{"detail":"Too many requests. Please try again later."}',
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/json",
            )
        return await call_next(request)
