"""
Rate limiting for abuse-prone endpoints (login, contact form)
Uses in-memory storage with a sliding window per client and endpoint
"""
import threading
import time
from collections import defaultdict
from typing import Dict, List, Tuple

from fastapi import HTTPException, Request, status


class RateLimiter:
    """
    In-memory sliding-window rate limiter.

    State is per process; with several workers each one enforces its own window.
    """

    def __init__(self, cleanup_interval: int = 60):
        # {identifier: [timestamp, ...]}
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._lock = threading.Lock()
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def _cleanup_old_entries(self, now: float, window_seconds: int) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - window_seconds * 2
        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [ts for ts in self._requests[identifier] if ts > cutoff]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now

    def is_allowed(self, identifier: str, max_requests: int, window_seconds: int = 60) -> Tuple[bool, int, int]:
        """
        Check and record a request.

        Returns:
            Tuple of (is_allowed, remaining_requests, retry_after_seconds)
        """
        now = time.time()
        with self._lock:
            self._cleanup_old_entries(now, window_seconds)

            window_start = now - window_seconds
            in_window = [ts for ts in self._requests[identifier] if ts > window_start]
            self._requests[identifier] = in_window

            if len(in_window) >= max_requests:
                retry_after = int(min(in_window) + window_seconds - now) + 1
                return False, 0, retry_after

            in_window.append(now)
            return True, max_requests - len(in_window), 0

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


def get_client_ip(request: Request) -> str:
    """Client IP, honouring the first X-Forwarded-For hop"""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def rate_limit(max_requests: int, window_seconds: int = 60):
    """
    Dependency factory limiting one endpoint per client IP.

    Usage:
        @router.post("/login", dependencies=[Depends(rate_limit(10))])
        def login(...):
            ...
    """
    async def checker(request: Request) -> None:
        identifier = f"{request.url.path}:{get_client_ip(request)}"
        allowed, _, retry_after = rate_limiter.is_allowed(identifier, max_requests, window_seconds)
        if not allowed:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Too many requests. Try again in {retry_after} seconds.",
                headers={
                    "X-RateLimit-Limit": str(max_requests),
                    "X-RateLimit-Remaining": "0",
                    "Retry-After": str(retry_after),
                },
            )

    return checker
