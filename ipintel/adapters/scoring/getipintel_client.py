"""getipintel.net scoring client.

Each query takes one token from the shared rate limiter, issues a single GET
and validates the JSON body. Failures are raised as ScoringAppError
subclasses; nothing is retried and a consumed token is never returned.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta

import httpx
from pydantic import ValidationError

from ipintel.adapters.rate_limit.base import AbstractRateLimiter
from ipintel.adapters.scoring.base import AbstractScoreClient
from ipintel.core.config import DEFAULT_SERVICE_HOST
from ipintel.core.errors import (
    ParseAppError,
    ServiceAppError,
    ServiceRateLimitedAppError,
    ThrottledAppError,
    TransportAppError,
    ValidationAppError,
)
from ipintel.core.rate_limit import get_rate_limiter
from ipintel.schemas.check import CheckResponse, CheckType

logger = logging.getLogger(__name__)

CLIENT_VERSION = "0.2.0"
USER_AGENT = f"ipintel-python/{CLIENT_VERSION} (+https://getipintel.net)"
DEFAULT_TIMEOUT_SECONDS = 10.0
CHECK_PATH = "/check.php"
SUCCESS_STATUS = "success"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client configuration.

    Attributes:
        email: Contact address the service requires with every query.
        scheme: "http" or "https".
        check_type: Detection mode (static lists or lists + ML).
        max_wait: Seconds (or a timedelta, normalized to seconds) to wait for
            a rate limiter token. Zero means the query blocks until the
            bucket has capacity.
        timeout_seconds: Overall HTTP timeout.
        host: Service host name.
    """

    email: str
    scheme: str = "http"
    check_type: CheckType = CheckType.STATIC
    max_wait: float = 0.0
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    host: str = DEFAULT_SERVICE_HOST

    def __post_init__(self) -> None:
        if self.scheme not in ("http", "https"):
            raise ValidationAppError(
                code="invalid_scheme",
                message=f"Unsupported scheme '{self.scheme}', expected http or https",
            )
        try:
            object.__setattr__(self, "check_type", CheckType(self.check_type))
        except ValueError as exc:
            raise ValidationAppError(
                code="invalid_check_type",
                message=f"Unknown check type '{self.check_type}', expected 'm' or 'b'",
            ) from exc
        if isinstance(self.max_wait, timedelta):
            object.__setattr__(self, "max_wait", self.max_wait.total_seconds())
        if isinstance(self.max_wait, bool) or not isinstance(self.max_wait, (int, float)):
            raise ValidationAppError(
                code="invalid_max_wait",
                message=f"max_wait must be seconds or a timedelta, got {type(self.max_wait).__name__}",
            )
        if self.max_wait < 0:
            raise ValidationAppError(
                code="invalid_max_wait",
                message="max_wait must be >= 0 (0 waits forever)",
            )
        if self.timeout_seconds <= 0:
            raise ValidationAppError(
                code="invalid_timeout",
                message="timeout_seconds must be > 0",
            )


class GetIPIntelClient(AbstractScoreClient):
    """Client for the getipintel.net proxy detection API.

    Uses a synchronous httpx client; concurrent callers may share one
    instance, and all instances share the rate limiter they are given.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        rate_limiter: AbstractRateLimiter | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Immutable client configuration.
            rate_limiter: Limiter to draw tokens from; defaults to the
                process-wide bucket.
            http_client: Optional httpx client (connection pool). When given,
                the caller owns it and close() leaves it open.
        """
        if rate_limiter is None:
            rate_limiter = get_rate_limiter()

        self.config = config
        self._rate_limiter = rate_limiter
        self._owns_http_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client()

    @property
    def rate_limiter(self) -> AbstractRateLimiter:
        return self._rate_limiter

    def get_url(self, ip: str) -> str:
        """Build the query URL; values are inserted verbatim."""
        cfg = self.config
        return (
            f"{cfg.scheme}://{cfg.host}{CHECK_PATH}"
            f"?ip={ip}&contact={cfg.email}&flags={cfg.check_type.value}&format=json"
        )

    def _acquire_token(self, ip: str) -> None:
        max_wait = self.config.max_wait
        if self._rate_limiter.acquire(1, max_wait):
            return

        retry_after = self._rate_limiter.wait_time(1)
        logger.warning(
            "ipintel.query.throttled",
            extra={"ip": ip, "max_wait_s": max_wait, "retry_after_s": round(retry_after, 3)},
        )
        raise ThrottledAppError(
            code="throttled",
            message=f"Throttled: can't make query within the next {max_wait:g}s",
            details={"ip": ip, "max_wait_seconds": max_wait, "retry_after": retry_after},
        )

    def _send(self, ip: str) -> httpx.Response:
        try:
            request = self._http.build_request(
                "GET",
                self.get_url(ip),
                headers={"User-Agent": USER_AGENT},
                timeout=self.config.timeout_seconds,
            )
        except httpx.InvalidURL as exc:
            raise TransportAppError(
                code="request_build_failed",
                message=f"Failed preparing request: {exc}",
                details={"ip": ip, "error_type": type(exc).__name__},
            ) from exc

        try:
            return self._http.send(request)
        except httpx.RequestError as exc:
            logger.warning(
                "ipintel.query.transport_error",
                extra={"ip": ip, "error_type": type(exc).__name__},
            )
            raise TransportAppError(
                code="transport_error",
                message=f"Failed to query API: {exc}",
                details={"ip": ip, "error_type": type(exc).__name__},
            ) from exc

    def get_proxy_score(self, ip: str) -> float:
        """Query the proxy score of an IP address.

        Args:
            ip: Address to check. Not validated here.

        Returns:
            float: 0 or 1 for static checks, a value in [0, 1] for dynamic ones.

        Raises:
            ThrottledAppError: No token within max_wait; nothing was sent.
            TransportAppError: The request failed before a response arrived.
            ServiceRateLimitedAppError: The service answered HTTP 429.
            ParseAppError: The body is not the expected JSON document.
            ServiceAppError: The service reported a failure status.
        """
        self._acquire_token(ip)

        start = time.perf_counter()
        response = self._send(ip)
        duration_ms = (time.perf_counter() - start) * 1000

        if response.status_code == 429:
            logger.warning(
                "ipintel.query.service_rate_limited",
                extra={"ip": ip, "status_code": response.status_code},
            )
            raise ServiceRateLimitedAppError(
                code="service_rate_limited",
                message="API error: Rate limit exceeded",
                details={"ip": ip, "http_status": 429},
            )

        try:
            payload = CheckResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning(
                "ipintel.query.parse_error",
                extra={"ip": ip, "status_code": response.status_code, "errors": exc.error_count()},
            )
            raise ParseAppError(
                code="parse_error",
                message=f"Failed to parse API response: {exc}",
                details={"ip": ip, "http_status": response.status_code},
            ) from exc

        if payload.status != SUCCESS_STATUS:
            logger.warning(
                "ipintel.query.service_error",
                extra={
                    "ip": ip,
                    "status_code": response.status_code,
                    "service_status": payload.status,
                    "service_message": payload.message,
                },
            )
            raise ServiceAppError(
                code="service_error",
                message=f"API error: {payload.message or payload.status}",
                details={"ip": ip, "http_status": response.status_code},
            )

        logger.info(
            "ipintel.query.completed",
            extra={
                "ip": ip,
                "check_type": self.config.check_type.value,
                "score": payload.result,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return payload.result

    def close(self) -> None:
        """Close the underlying connection pool if this client created it."""
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> GetIPIntelClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
