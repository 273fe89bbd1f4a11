"""In-memory token bucket rate limiter.

Notes:
- Per-process only: separate processes each get their own budget.
- Thread-safe: a lock guards the bucket; callers sleep outside of it.
- Lazy refill: tokens are credited on access, no background thread.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from ipintel.adapters.rate_limit.base import AbstractRateLimiter

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter(AbstractRateLimiter):
    """Token bucket refilled by a fixed quantum every fill interval.

    The bucket starts full. A caller that cannot be served immediately
    reserves its tokens ahead of time: the available count goes negative
    and the caller sleeps until the tick at which those tokens are credited.
    Reservations are granted in lock order, so later callers queue behind
    earlier ones.
    """

    def __init__(
        self,
        *,
        capacity: int,
        fill_interval: float,
        quantum: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize a full bucket.

        Args:
            capacity: Maximum number of tokens held (burst size).
            fill_interval: Seconds between two refills.
            quantum: Tokens added at every refill.
            clock: Monotonic time source in seconds.
            sleep: Function used to block the caller.

        Raises:
            ValueError: If any parameter is not positive.
        """
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        if fill_interval <= 0:
            raise ValueError("fill_interval must be > 0")
        if quantum < 1:
            raise ValueError("quantum must be >= 1")

        self._capacity = capacity
        self._fill_interval = fill_interval
        self._quantum = quantum
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._start = clock()
        self._latest_tick = 0
        self._available = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def fill_interval(self) -> float:
        return self._fill_interval

    @property
    def quantum(self) -> int:
        return self._quantum

    def _current_tick(self, now: float) -> int:
        return int((now - self._start) // self._fill_interval)

    def _adjust(self, tick: int) -> None:
        """Credit the tokens earned between the latest tick and tick."""
        last_tick = self._latest_tick
        self._latest_tick = tick
        if self._available >= self._capacity:
            return
        self._available = min(
            self._capacity,
            self._available + (tick - last_tick) * self._quantum,
        )

    def _wait_for(self, now: float, tick: int, deficit: int) -> float:
        """Seconds from now until deficit tokens have been credited."""
        ticks_needed = -(-deficit // self._quantum)
        end_time = self._start + (tick + ticks_needed) * self._fill_interval
        return end_time - now

    def _reserve(self, tokens: int, max_wait: float) -> tuple[float, bool]:
        """Take or reserve tokens under the lock.

        Returns:
            Tuple of (seconds_to_wait, granted).
        """
        with self._lock:
            now = self._clock()
            tick = self._current_tick(now)
            self._adjust(tick)

            remaining = self._available - tokens
            if remaining >= 0:
                self._available = remaining
                return 0.0, True

            wait = self._wait_for(now, tick, -remaining)
            if max_wait > 0 and wait > max_wait:
                return wait, False

            self._available = remaining
            return wait, True

    def acquire(self, tokens: int = 1, max_wait: float = 0.0) -> bool:
        """Take tokens from the bucket, blocking up to max_wait seconds.

        Args:
            tokens: Units to take (default 1).
            max_wait: Maximum seconds to block; 0 blocks as long as needed.

        Returns:
            True when the tokens were taken; False when they would not be
            available within max_wait, in which case nothing was taken and
            the call returns without sleeping.

        Raises:
            ValueError: If tokens < 1 or max_wait < 0.
        """
        if tokens < 1:
            raise ValueError("tokens must be >= 1")
        if max_wait < 0:
            raise ValueError("max_wait must be >= 0")

        wait, granted = self._reserve(tokens, max_wait)
        if not granted:
            logger.debug(
                "rate_limit.denied",
                extra={"tokens": tokens, "wait_s": round(wait, 3), "max_wait_s": max_wait},
            )
            return False

        if wait > 0:
            logger.debug(
                "rate_limit.waiting",
                extra={"tokens": tokens, "wait_s": round(wait, 3)},
            )
            self._sleep(wait)
        return True

    def wait_time(self, tokens: int = 1) -> float:
        """Seconds until tokens could be taken without reserving."""
        if tokens < 1:
            raise ValueError("tokens must be >= 1")
        with self._lock:
            now = self._clock()
            tick = self._current_tick(now)
            self._adjust(tick)
            deficit = tokens - self._available
            if deficit <= 0:
                return 0.0
            return self._wait_for(now, tick, deficit)

    def available(self) -> int:
        """Current token count; negative while reservations are pending."""
        with self._lock:
            self._adjust(self._current_tick(self._clock()))
            return self._available
