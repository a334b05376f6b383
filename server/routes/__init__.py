"""Router aggregation."""

from __future__ import annotations

from fastapi import APIRouter

from pagehook.routers import health as health_router_module
from pagehook.routers import webhook as webhook_router_module

# Webhook path is configured on the platform side, so no prefix here.
api_router = APIRouter()

api_router.include_router(health_router_module.router)
api_router.include_router(webhook_router_module.router)

__all__ = ["api_router"]
