"""Process-wide rate limiter handle.

getipintel.net enforces its limit per account, so every client in the
process must draw from the same bucket. Clients receive it explicitly; this
module is the one place that builds and caches it.
"""

from __future__ import annotations

import logging
import threading

from ipintel.adapters.rate_limit.base import AbstractRateLimiter
from ipintel.adapters.rate_limit.token_bucket import TokenBucketRateLimiter
from ipintel.core.config import LimiterSettings, settings

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, float, int] | None = None
_limiter_lock = threading.Lock()


def create_rate_limiter(limiter_settings: LimiterSettings | None = None) -> TokenBucketRateLimiter:
    """Build a new token bucket from settings.

    Args:
        limiter_settings: Bucket parameters; defaults to global settings.

    Returns:
        A fresh, full TokenBucketRateLimiter.
    """

    cfg = limiter_settings or settings.limiter
    return TokenBucketRateLimiter(
        capacity=cfg.capacity,
        fill_interval=cfg.fill_interval_seconds,
        quantum=cfg.quantum,
    )


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module so every client shares one budget.
    If configuration changes (primarily in tests), the limiter is rebuilt.

    Returns:
        AbstractRateLimiter: Shared limiter instance.
    """

    global _limiter, _limiter_config

    cfg = settings.limiter
    config = (cfg.capacity, cfg.fill_interval_seconds, cfg.quantum)

    with _limiter_lock:
        if _limiter is None or _limiter_config != config:
            _limiter = create_rate_limiter(cfg)
            _limiter_config = config
            logger.info(
                "rate_limit.initialized",
                extra={
                    "capacity": cfg.capacity,
                    "fill_interval_s": cfg.fill_interval_seconds,
                    "quantum": cfg.quantum,
                },
            )
        return _limiter


def reset_rate_limiter() -> None:
    """Drop the cached limiter so the next call builds a full bucket."""

    global _limiter, _limiter_config

    with _limiter_lock:
        _limiter = None
        _limiter_config = None
