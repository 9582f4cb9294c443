# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Token bucket throttle shared by concurrent probe attempts."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from .config import DEFAULT_LIMITER_BURST, DEFAULT_LIMITER_INTERVAL, RateLimitSettings, load_rate_limit_settings
from .errors import RateLimitCancelled

logger = logging.getLogger(__name__)


class TokenBucketLimiter:
    """
    Thread-safe token bucket.

    The bucket starts full with ``burst`` tokens and gains one token every
    ``interval`` seconds, capped at ``burst``. ``acquire`` blocks until a token
    can be taken; waiters are woken in no particular order.
    """

    def __init__(
        self,
        interval: float = DEFAULT_LIMITER_INTERVAL,
        burst: int = DEFAULT_LIMITER_BURST,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval <= 0:
            raise ValueError("interval must be > 0")
        if burst < 1:
            raise ValueError("burst must be >= 1")
        self.interval = interval
        self.burst = burst
        self._clock = clock
        self._lock = threading.Lock()
        self._tokens = float(burst)
        self._last = clock()

    @classmethod
    def from_settings(cls, settings: RateLimitSettings | None = None) -> TokenBucketLimiter:
        settings = settings or load_rate_limit_settings()
        return cls(interval=settings.interval, burst=settings.burst)

    def _refill(self, now: float) -> None:
        elapsed = now - self._last
        if elapsed > 0:
            self._tokens = min(float(self.burst), self._tokens + elapsed / self.interval)
        self._last = now

    def _take(self) -> float:
        """Take a token and return 0.0, or return the seconds until one is due."""
        with self._lock:
            self._refill(self._clock())
            if self._tokens >= 1:
                self._tokens -= 1
                return 0.0
            return (1 - self._tokens) * self.interval

    def try_acquire(self) -> bool:
        """Take a token without waiting."""
        return self._take() == 0.0

    def acquire(self, cancel: threading.Event | None = None, timeout: float | None = None) -> None:
        """
        Block until a token is taken.

        Raises RateLimitCancelled if ``cancel`` is set or ``timeout`` elapses
        first. A cancelled wait does not consume a token.
        """
        deadline = None if timeout is None else self._clock() + timeout
        while True:
            if cancel is not None and cancel.is_set():
                raise RateLimitCancelled("rate limit wait cancelled")
            delay = self._take()
            if delay == 0.0:
                return
            if deadline is not None:
                remaining = deadline - self._clock()
                if remaining <= 0:
                    raise RateLimitCancelled("rate limit wait timed out")
                delay = min(delay, remaining)
            logger.debug("waiting %.3fs for a rate limit token", delay)
            if cancel is not None:
                cancel.wait(delay)
            else:
                time.sleep(delay)

    def __repr__(self) -> str:
        return f"TokenBucketLimiter(interval={self.interval!r}, burst={self.burst!r})"


__all__ = ["TokenBucketLimiter"]
