import ipaddress
import threading
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from ipintel.adapters.scoring.factory import create_score_client
from ipintel.adapters.scoring.getipintel_client import GetIPIntelClient
from ipintel.core.config import settings
from ipintel.core.errors import ValidationAppError
from ipintel.schemas.check import ScoreResponse

router = APIRouter(tags=["Score"])

_client: GetIPIntelClient | None = None
_client_lock = threading.Lock()


def get_score_client() -> GetIPIntelClient:
    """Return the client shared by all requests, building it on first use.

    Each request holds a threadpool worker while it waits for a token, so
    the API never waits unbounded: IPINTEL_MAX_WAIT_SECONDS=0 is replaced
    by APP_MAX_WAIT_SECONDS.

    Raises:
        ConfigurationAppError: If IPINTEL_EMAIL is not configured.
    """
    global _client

    with _client_lock:
        if _client is None:
            max_wait = settings.client.max_wait_seconds or settings.app.max_wait_seconds
            _client = create_score_client(max_wait=max_wait)
        return _client


def close_score_client() -> None:
    """Close the shared client and its connection pool (app shutdown)."""
    global _client

    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None


def _normalize_ip(raw: str) -> str:
    try:
        return str(ipaddress.ip_address(raw))
    except ValueError as exc:
        raise ValidationAppError(
            code="invalid_ip",
            message=f"'{raw}' is not a valid IPv4 or IPv6 address",
            details={"ip": raw},
        ) from exc


@router.get("/score/{ip}", response_model=ScoreResponse)
def get_score(
    ip: Annotated[str, Path(description="IPv4 or IPv6 address to check")],
    client: Annotated[GetIPIntelClient, Depends(get_score_client)],
) -> ScoreResponse:
    """Return the proxy score of an IP address.

    Runs in the threadpool: waiting for a rate limiter token blocks only
    this request, for at most the client's max_wait.

    Raises:
        ValidationAppError: 400 when ip is not an IP address.
        ScoringAppError: Mapped to 429/502/503 by the exception handlers.
    """
    address = _normalize_ip(ip)
    score = client.get_proxy_score(address)
    return ScoreResponse(ip=address, score=score, check_type=client.config.check_type)
