"""Top-level API router aggregating all v0 sub-routers."""

from __future__ import annotations

from fastapi import APIRouter

from flowsankey.api.v0.health import router as health_router
from flowsankey.api.v0.sankey import router as sankey_router

api_router = APIRouter(prefix="/api/v0")
api_router.include_router(health_router)
api_router.include_router(sankey_router)
