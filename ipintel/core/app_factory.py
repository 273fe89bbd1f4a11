"""Application factory for the lookup API.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ipintel.adapters.scoring.getipintel_client import CLIENT_VERSION
from ipintel.api.routes import health_router, score_router
from ipintel.api.routes.score import close_score_client
from ipintel.core.config import settings
from ipintel.core.exception_handlers import setup_exception_handlers
from ipintel.core.logging import configure_logging
from ipintel.core.middleware import request_id_middleware

OPENAPI_TAGS = [
    {
        "name": "Score",
        "description": "Proxy likelihood of an IP address, via getipintel.net.",
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Release the shared scoring client when the server stops."""
    yield
    close_score_client()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="IPIntel Lookup API",
        description=(
            "Returns the getipintel.net proxy score of an IP address. All "
            "requests share one token bucket matching the service's limit of "
            "15 queries per minute."
        ),
        version=CLIENT_VERSION,
        debug=settings.app.debug,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(score_router, prefix="/v1")
    app.include_router(health_router)

    return app
