"""Application-level exception types.

This module defines the domain errors raised by the scoring client and the
lookup API, enabling consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional so each error only carries what it knows.
    """

    code: str
    message: str
    hint: str
    ip: str
    http_status: int
    max_wait_seconds: float
    retry_after: float
    error_type: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class ConfigurationAppError(AppError):
    """Raised when required settings are missing or inconsistent."""


class ScoringAppError(AppError):
    """Base class for failures of a single proxy score query."""


class ThrottledAppError(ScoringAppError):
    """Local rate limiter could not grant a token within the max wait."""


class TransportAppError(ScoringAppError):
    """The request could not be built or no response was received."""


class ServiceRateLimitedAppError(ScoringAppError):
    """The remote service answered HTTP 429."""


class ParseAppError(ScoringAppError):
    """The response body is not JSON of the expected shape."""


class ServiceAppError(ScoringAppError):
    """The response decoded but its status reports a failure."""
