"""Pydantic schemas for getipintel.net payloads and lookup API responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class CheckType(str, Enum):
    """Detection mode sent as the ``flags`` query parameter."""

    # Static lists only. The score is either 0 or 1.
    STATIC = "m"
    # Static lists plus machine learning. The score is a float in [0, 1].
    DYNAMIC = "b"


class CheckResponse(BaseModel):
    """Body returned by ``check.php?format=json``."""

    status: str = Field(..., description="'success' or an error status.")
    message: str | None = Field(
        default=None,
        description="Service-supplied detail, present on errors.",
    )
    result: float = Field(
        default=0.0,
        description="Proxy score; transmitted as a string, e.g. \"0.5\".",
    )


class ScoreResponse(BaseModel):
    """Response of ``GET /v1/score/{ip}``."""

    ip: str = Field(..., description="Queried IP address.")
    score: float = Field(..., description="Proxy likelihood returned by the service.")
    check_type: CheckType = Field(
        ..., description="Detection mode used: 'm' (static) or 'b' (dynamic)."
    )
