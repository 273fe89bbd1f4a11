"""Scoring adapter layer - clients for IP reputation services."""

from ipintel.adapters.scoring.base import AbstractScoreClient
from ipintel.adapters.scoring.factory import create_score_client, new_client
from ipintel.adapters.scoring.getipintel_client import ClientConfig, GetIPIntelClient

__all__ = [
    "AbstractScoreClient",
    "ClientConfig",
    "GetIPIntelClient",
    "create_score_client",
    "new_client",
]
