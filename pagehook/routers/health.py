from __future__ import annotations

from fastapi import APIRouter, Depends

from pagehook.engine import WebhookEngine, get_engine
from server.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_settings),
    engine: WebhookEngine = Depends(get_engine),
) -> dict:
    """Return service health status and registered handler counts."""
    return {
        "ok": True,
        "service": settings.app_name,
        "version": settings.app_version,
        "handlers": engine.registry.summary(),
    }


@router.get("/healthz")
async def healthz() -> dict:
    """Alternative health endpoint (kept for compatibility)."""
    return {"status": "ok"}
