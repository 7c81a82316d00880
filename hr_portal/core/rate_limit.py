"""Fixed-window rate limiting for the sensitive auth endpoints.

Each limiter keeps one counter per client address. A window opens on the
first request from an address and lasts ``window`` seconds; every request in
the window counts, successful or not.

Counters live in process memory, so they reset on restart and are not shared
between workers.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import structlog
from fastapi import Request

from hr_portal.config import get_settings
from hr_portal.core.exceptions import RateLimitExceededException

logger = structlog.get_logger(__name__)


@dataclass
class RateLimitResult:
    """Result of rate limit check."""

    allowed: bool
    remaining: int
    limit: int
    retry_after: Optional[int] = None


@dataclass
class _Window:
    started_at: float
    count: int


class FixedWindowLimiter:
    """Fixed window rate limiter.

    Args:
        name: Label used in logs
        limit: Maximum requests per window
        window: Window size in seconds
        message: Error message returned once the limit is hit
        clock: Time source, injectable for tests
    """

    def __init__(
        self,
        name: str,
        limit: int,
        window: int,
        message: str = "Too many requests. Please try again later.",
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit <= 0:
            raise ValueError("limit must be positive")
        if window <= 0:
            raise ValueError("window must be positive")

        self.name = name
        self.limit = limit
        self.window = window
        self.message = message
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._next_sweep = clock() + window
        self._lock = threading.Lock()

    def _sweep(self, now: float) -> None:
        # Caller holds the lock
        expired = [key for key, w in self._windows.items() if now - w.started_at >= self.window]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self.window

    def check(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and report whether it may proceed."""
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            current = self._windows.get(key)

            if current is None or now - current.started_at >= self.window:
                self._windows[key] = _Window(started_at=now, count=1)
                return RateLimitResult(allowed=True, remaining=self.limit - 1, limit=self.limit)

            if current.count < self.limit:
                current.count += 1
                return RateLimitResult(
                    allowed=True,
                    remaining=self.limit - current.count,
                    limit=self.limit,
                )

            retry_after = int(current.started_at + self.window - now) + 1
            return RateLimitResult(
                allowed=False,
                remaining=0,
                limit=self.limit,
                retry_after=retry_after,
            )

    def reset(self, key: Optional[str] = None) -> None:
        """Forget one key, or every key when none is given."""
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    def __call__(self, request: Request) -> None:
        """FastAPI dependency: reject the request once the window is exhausted."""
        key = client_address(request)
        result = self.check(key)
        if not result.allowed:
            logger.warning(
                "Rate limit exceeded",
                limiter=self.name,
                client_ip=key,
                path=request.url.path,
                retry_after=result.retry_after,
            )
            raise RateLimitExceededException(self.message, retry_after=result.retry_after or 0)


def client_address(request: Request) -> str:
    """Address used as the rate-limit key.

    Proxies append to ``X-Forwarded-For``, so only the entries added by our own
    ``TRUSTED_PROXY_HOPS`` proxies are believed; anything to their left is
    client supplied.
    """
    settings = get_settings()
    if settings.TRUST_FORWARDED_FOR and settings.TRUSTED_PROXY_HOPS > 0:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            hops = [part.strip() for part in forwarded.split(",") if part.strip()]
            if len(hops) >= settings.TRUSTED_PROXY_HOPS:
                return hops[-settings.TRUSTED_PROXY_HOPS]
    return request.client.host if request.client else "unknown"


settings = get_settings()

login_limiter = FixedWindowLimiter(
    "login",
    limit=settings.LOGIN_RATE_LIMIT,
    window=settings.LOGIN_RATE_WINDOW_SECONDS,
    message="Too many login attempts. Please try again later.",
)

recovery_answer_limiter = FixedWindowLimiter(
    "recovery_answer",
    limit=settings.RECOVERY_RATE_LIMIT,
    window=settings.RECOVERY_RATE_WINDOW_SECONDS,
)

reset_password_limiter = FixedWindowLimiter(
    "reset_password",
    limit=settings.RESET_PASSWORD_RATE_LIMIT,
    window=settings.RESET_PASSWORD_RATE_WINDOW_SECONDS,
    message="Too many password reset attempts. Please try again later.",
)

ALL_LIMITERS = (login_limiter, recovery_answer_limiter, reset_password_limiter)


def reset_rate_limiters() -> None:
    """Clear every limiter's counters."""
    for limiter in ALL_LIMITERS:
        limiter.reset()
