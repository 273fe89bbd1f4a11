"""Rate limiting adapters.

A small abstraction layer so the scoring client works against any blocking
limiter; the in-process token bucket is the only backend today.
"""

from ipintel.adapters.rate_limit.base import AbstractRateLimiter
from ipintel.adapters.rate_limit.token_bucket import TokenBucketRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "TokenBucketRateLimiter",
]
