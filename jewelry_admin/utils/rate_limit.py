"""
In-memory rate limiting for API routes.
Limits the number of requests a client address can make within a time window.
"""
import time
import logging
from collections import defaultdict
from typing import Callable, Dict, List

from fastapi import HTTPException, Request

from ..config.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def client_address(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer, else 'unknown'."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or "unknown"
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RateLimiter:
    """
    Fixed-window counter keyed by client address.

    Usable directly as a FastAPI dependency. Timestamps outside the window
    are dropped on every hit for that client; nothing else is evicted.
    """

    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, List[float]] = defaultdict(list)

    def hit(self, key: str) -> bool:
        """Record a request for ``key``; False when the limit is already reached."""
        now = self._clock()
        window_start = now - self.window_seconds
        recent = [t for t in self._hits[key] if t > window_start]
        self._hits[key] = recent

        if len(recent) >= self.limit:
            return False

        recent.append(now)
        return True

    def reset(self) -> None:
        self._hits.clear()

    async def __call__(self, request: Request) -> None:
        key = client_address(request)
        if not self.hit(key):
            logger.warning(f"⚠️ Rate limit hit for {key} on {request.url.path}")
            raise HTTPException(status_code=429, detail="Too many requests, please try again later.")


# Predefined rate limiters
api_rate_limit = RateLimiter(settings.api_rate_limit, settings.api_rate_window_seconds)
strict_rate_limit = RateLimiter(settings.strict_rate_limit, settings.strict_rate_window_seconds)
