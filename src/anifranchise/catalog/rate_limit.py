"""Rolling-window rate limiter shared by all catalog requests."""

import asyncio
import time
from collections import deque
from typing import Awaitable, Callable

from anifranchise.catalog.errors import BuildAbortedError
from anifranchise.utils.debug import debug

# AniList's documented limit for the public GraphQL endpoint.
DEFAULT_REQUESTS_PER_MINUTE = 90


class RateLimiter:
    """Admit at most ``max_requests`` calls in any ``period`` seconds.

    ``acquire`` suspends the caller until a slot is free instead of failing the
    request. The admission check and the timestamp bookkeeping happen under a
    single lock, so interleaved callers cannot both claim the last slot.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_REQUESTS_PER_MINUTE,
        period: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_requests: Requests admitted per window.
            period: Window length in seconds.
            clock: Monotonic clock, injectable for tests.
            sleep: Async sleep, injectable for tests.

        Raises:
            ValueError: If max_requests or period is not positive.
        """
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if period <= 0:
            raise ValueError("period must be positive")
        self.max_requests = max_requests
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._admitted: deque[float] = deque()
        self.total_wait = 0.0

    def _expire(self, now: float) -> None:
        while self._admitted and now - self._admitted[0] >= self.period:
            self._admitted.popleft()

    async def acquire(self, deadline: float | None = None) -> None:
        """Wait until the request may be sent, then record it.

        Args:
            deadline: Optional ``clock()`` value. The request is refused instead
                of admitted once waiting for a slot would reach it.

        Raises:
            BuildAbortedError: If the deadline is reached before admission.
        """
        async with self._lock:
            now = self._clock()
            self._expire(now)
            while len(self._admitted) >= self.max_requests:
                wait = self._admitted[0] + self.period - now
                if deadline is not None and now + wait >= deadline:
                    raise BuildAbortedError("rate limit wait would pass the deadline")
                self.total_wait += wait
                debug(
                    f"Rate limit reached, waiting {wait:.2f}s "
                    f"({self.total_wait:.2f}s waited so far)"
                )
                await self._sleep(wait)
                now = self._clock()
                self._expire(now)
            if deadline is not None and now >= deadline:
                raise BuildAbortedError("deadline passed before the request was sent")
            self._admitted.append(now)
