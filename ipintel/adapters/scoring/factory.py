"""Factory functions for creating scoring client instances."""

from __future__ import annotations

from datetime import timedelta

import httpx

from ipintel.adapters.rate_limit.base import AbstractRateLimiter
from ipintel.adapters.scoring.getipintel_client import ClientConfig, GetIPIntelClient
from ipintel.core.config import ClientSettings, settings
from ipintel.core.errors import ConfigurationAppError
from ipintel.schemas.check import CheckType


def new_client(
    email: str,
    use_tls: bool = False,
    check_type: CheckType | str = CheckType.STATIC,
    max_wait: float | timedelta = 0.0,
    *,
    rate_limiter: AbstractRateLimiter | None = None,
    http_client: httpx.Client | None = None,
) -> GetIPIntelClient:
    """Create a client from explicit parameters.

    Args:
        email: Contact address sent with every query.
        use_tls: Use https instead of http.
        check_type: CheckType.STATIC ("m") or CheckType.DYNAMIC ("b").
        max_wait: Longest wait for a rate limiter token, in seconds or as a
            timedelta. Zero blocks until the bucket has capacity.
        rate_limiter: Limiter to share; defaults to the process-wide bucket.
        http_client: Optional httpx client to reuse.

    Returns:
        GetIPIntelClient: Configured client.

    Raises:
        ValidationAppError: If check_type or max_wait is invalid.

    Example:
        >>> client = new_client("you@example.com", False, CheckType.STATIC, 5)
        >>> client.get_proxy_score("1.2.3.4")  # doctest: +SKIP
        0.0
    """
    config = ClientConfig(
        email=email,
        scheme="https" if use_tls else "http",
        check_type=check_type,
        max_wait=max_wait,
    )
    return GetIPIntelClient(config, rate_limiter=rate_limiter, http_client=http_client)


def create_score_client(
    client_settings: ClientSettings | None = None,
    *,
    max_wait: float | None = None,
    rate_limiter: AbstractRateLimiter | None = None,
) -> GetIPIntelClient:
    """Create a client from environment configuration (IPINTEL_* variables).

    Args:
        client_settings: Client settings; defaults to global settings.
        max_wait: Overrides IPINTEL_MAX_WAIT_SECONDS when given.
        rate_limiter: Limiter to share; defaults to the process-wide bucket.

    Returns:
        GetIPIntelClient: Configured client.

    Raises:
        ConfigurationAppError: If no contact email is configured.
    """
    cfg = client_settings or settings.client

    if not cfg.email:
        raise ConfigurationAppError(
            code="missing_contact_email",
            message="getipintel.net requires a contact email",
            details={"hint": "Set the IPINTEL_EMAIL environment variable"},
        )

    config = ClientConfig(
        email=cfg.email,
        scheme="https" if cfg.use_tls else "http",
        check_type=cfg.check_type,
        max_wait=cfg.max_wait_seconds if max_wait is None else max_wait,
        timeout_seconds=cfg.timeout_seconds,
        host=cfg.host,
    )
    return GetIPIntelClient(config, rate_limiter=rate_limiter)
