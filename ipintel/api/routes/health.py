from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe; does not contact getipintel.net or use a token.

    Declared async so it runs on the event loop, not in the threadpool
    shared with score requests waiting for tokens.
    """

    return {"status": "ok"}
