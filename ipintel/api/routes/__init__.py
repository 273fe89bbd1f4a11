from __future__ import annotations

from ipintel.api.routes.health import router as health_router
from ipintel.api.routes.score import router as score_router

__all__ = ["health_router", "score_router"]
