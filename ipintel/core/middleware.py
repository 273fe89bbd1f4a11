"""HTTP middleware for request correlation and access logging.

Every response carries X-Request-ID (echoed from the caller or generated)
and X-Request-Duration-ms. The id is held in a contextvar while the request
runs so the scoring client's log records are correlated with it.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from ipintel.core.config import settings
from ipintel.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


def _resolve_request_id(request: Request, header_name: str) -> str:
    incoming = request.headers.get(header_name, "").strip()
    return incoming or uuid.uuid4().hex


async def request_id_middleware(request: Request, call_next) -> Response:
    """Correlate the request and log one access event when it completes.

    The header name is configurable via LOG_REQUEST_ID_HEADER.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with correlation headers added.
    """

    header_name = settings.log.request_id_header
    request_id = _resolve_request_id(request, header_name)
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http.request.completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers["X-Request-Duration-ms"] = f"{duration_ms:.2f}"
    return response
