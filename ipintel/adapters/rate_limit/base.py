"""Rate limiter interfaces.

Scoring clients depend on this abstraction (not the concrete bucket) so a
shared store could replace the in-process bucket without touching them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRateLimiter(ABC):
    """Interface for blocking rate limiters."""

    @abstractmethod
    def acquire(self, tokens: int = 1, max_wait: float = 0.0) -> bool:
        """Take tokens, blocking until they are available.

        Args:
            tokens: Units to take (default 1).
            max_wait: Longest time in seconds the caller accepts to wait.
                Zero means no bound: the call blocks until it succeeds.

        Returns:
            True once the tokens were taken, False when they could not be
            taken within max_wait. Nothing is consumed on False.
        """
        raise NotImplementedError

    @abstractmethod
    def wait_time(self, tokens: int = 1) -> float:
        """Seconds until tokens could be taken without waiting."""
        raise NotImplementedError
