"""
Sliding-window rate limiter over batch start times.

Every batch start is pushed to the front of a bounded window sized to the
number of batches whose requests fit under the per-minute ceiling:

    capacity = rate_limit // (requests_per_address * parallelism)

Once the window is full, the next batch may only start 61 seconds after the
oldest recorded start: one 60-second window plus a second of slack for clock
and latency drift.

This bounds batch *start* spacing, not the completion rate of individual
requests; bursts inside a batch are not throttled separately.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Awaitable, Callable

from address_screening.screening_logging import get_logger

logger = get_logger(__name__)

WAIT_SEC = 61.0


def window_capacity(rate_limit: int, parallelism: int, requests_per_address: int = 2) -> int:
    """Batches per window; at least 1 so a tight ceiling still spaces batches out."""
    return max(1, rate_limit // (requests_per_address * parallelism))


class SlidingWindowRateLimiter:
    """
    Tracks batch start times, most recent first.

    clock and sleep are injectable (seconds) so tests can drive time directly.
    """

    def __init__(
        self,
        capacity: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._window: deque[float] = deque(maxlen=capacity)
        self._clock = clock
        self._sleep = sleep

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def window(self) -> tuple[float, ...]:
        """Recorded start times, most recent first."""
        return tuple(self._window)

    def record_batch_start(self, now: float | None = None) -> None:
        """Push a batch start to the front; the oldest entry falls off beyond capacity."""
        self._window.appendleft(self._clock() if now is None else now)

    def delay_needed(self, now: float | None = None) -> float:
        """Seconds to wait before the next batch may start (0.0 if none)."""
        if len(self._window) < self._capacity:
            return 0.0
        now = self._clock() if now is None else now
        since_oldest = now - self._window[-1]
        if since_oldest < WAIT_SEC:
            return WAIT_SEC - since_oldest
        return 0.0

    async def await_if_needed(self) -> float:
        """Sleep until the window allows another batch start. Returns seconds slept."""
        delay = self.delay_needed()
        if delay > 0:
            logger.info("rate_limit_sleep", sleep_ms=int(delay * 1000), capacity=self._capacity)
            await self._sleep(delay)
        return delay
