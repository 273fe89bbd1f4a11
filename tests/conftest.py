"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before anything imports ipintel, because the
settings object is built at import time.
"""

import os

os.environ["APP_ENV"] = "testing"
os.environ.setdefault("IPINTEL_EMAIL", "test@example.com")
os.environ.setdefault("IPINTEL_MAX_WAIT_SECONDS", "1")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Callable

import httpx
import pytest

from ipintel.adapters.rate_limit.token_bucket import TokenBucketRateLimiter
from ipintel.adapters.scoring.getipintel_client import ClientConfig, GetIPIntelClient
from ipintel.core.rate_limit import reset_rate_limiter


class FakeClock:
    """Deterministic monotonic clock; sleep() advances it."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> TokenBucketRateLimiter:
    """Bucket with the service's production parameters on a fake clock."""
    return TokenBucketRateLimiter(
        capacity=15,
        fill_interval=4.0,
        quantum=1,
        clock=clock.time,
        sleep=clock.sleep,
    )


@pytest.fixture(autouse=True)
def _fresh_shared_limiter():
    reset_rate_limiter()
    yield
    reset_rate_limiter()


@pytest.fixture
def json_handler():
    """Build MockTransport handlers answering every request with a fixed body."""

    def _build(body: dict | str, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            if isinstance(body, str):
                return httpx.Response(status_code, text=body)
            return httpx.Response(status_code, json=body)

        return handler

    return _build


@pytest.fixture
def make_client(limiter: TokenBucketRateLimiter):
    """Factory for clients backed by a MockTransport and the fake-clock bucket."""

    created: list[GetIPIntelClient] = []

    def _make(handler, *, rate_limiter=None, **config) -> GetIPIntelClient:
        config.setdefault("email", "a@b.com")
        client = GetIPIntelClient(
            ClientConfig(**config),
            rate_limiter=rate_limiter or limiter,
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        created.append(client)
        return client

    yield _make

    for client in created:
        client._http.close()
