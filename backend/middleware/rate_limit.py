"""
In-memory login throttling.

Each (client IP, path) key keeps the timestamps of its recent attempts; a
request is refused once the window already holds `max_requests` of them.
State lives in the process, so every worker throttles independently.
"""
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict

from fastapi import Request

from domain.errors import RateLimitError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window counter keyed by an arbitrary string."""

    # every this many checks, keys idle for a whole window are swept
    SWEEP_EVERY = 256

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._checks = 0

    def _window(self, key: str, window_seconds: int) -> Deque[float]:
        """Prune expired hits for `key`; an emptied key is dropped from the map."""
        hits = self._hits.get(key)
        if hits is None:
            return deque()
        horizon = self._clock() - window_seconds
        while hits and hits[0] <= horizon:
            hits.popleft()
        if not hits:
            del self._hits[key]
        return hits

    def _sweep(self, window_seconds: int):
        for key in list(self._hits):
            self._window(key, window_seconds)

    def check(self, key: str, max_requests: int, window_seconds: int) -> bool:
        """Record an attempt for `key`; False if the window is already full."""
        self._checks += 1
        if self._checks % self.SWEEP_EVERY == 0:
            self._sweep(window_seconds)

        hits = self._window(key, window_seconds)
        if len(hits) >= max_requests:
            return False
        hits.append(self._clock())
        self._hits[key] = hits
        return True

    def remaining(self, key: str, max_requests: int, window_seconds: int) -> int:
        return max(0, max_requests - len(self._window(key, window_seconds)))

    def reset(self):
        self._hits.clear()
        self._checks = 0


_limiter = RateLimiter()


def rate_limit(max_requests: int = 10, window_seconds: int = 60):
    """
    FastAPI dependency factory.

    Usage:
        @router.post("/login")
        async def login(body: LoginRequest, _=Depends(rate_limit(20, 60))):
            ...
    """
    async def _check_rate_limit(request: Request):
        client_ip = request.client.host if request.client else "unknown"
        key = f"{client_ip}:{request.url.path}"

        if _limiter.check(key, max_requests, window_seconds):
            return

        logger.warning(f"Too many attempts from {client_ip} on {request.url.path}")
        raise RateLimitError(
            f"Too many attempts. At most {max_requests} requests "
            f"every {window_seconds} seconds.",
            headers={
                "Retry-After": str(window_seconds),
                "X-RateLimit-Limit": str(max_requests),
                "X-RateLimit-Remaining": str(_limiter.remaining(key, max_requests, window_seconds)),
            },
        )

    return _check_rate_limit
