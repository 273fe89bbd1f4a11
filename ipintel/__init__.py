"""Rate-limited client for the getipintel.net proxy detection API."""

from ipintel.adapters.rate_limit import AbstractRateLimiter, TokenBucketRateLimiter
from ipintel.adapters.scoring import (
    AbstractScoreClient,
    ClientConfig,
    GetIPIntelClient,
    create_score_client,
    new_client,
)
from ipintel.adapters.scoring.getipintel_client import CLIENT_VERSION
from ipintel.core.errors import (
    AppError,
    ConfigurationAppError,
    ParseAppError,
    ScoringAppError,
    ServiceAppError,
    ServiceRateLimitedAppError,
    ThrottledAppError,
    TransportAppError,
    ValidationAppError,
)
from ipintel.core.rate_limit import get_rate_limiter
from ipintel.schemas.check import CheckType

__version__ = CLIENT_VERSION

__all__ = [
    "AbstractRateLimiter",
    "AbstractScoreClient",
    "AppError",
    "CheckType",
    "ClientConfig",
    "ConfigurationAppError",
    "GetIPIntelClient",
    "ParseAppError",
    "ScoringAppError",
    "ServiceAppError",
    "ServiceRateLimitedAppError",
    "ThrottledAppError",
    "TokenBucketRateLimiter",
    "TransportAppError",
    "ValidationAppError",
    "create_score_client",
    "get_rate_limiter",
    "new_client",
]
