"""Health and readiness probe endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flowsankey.api.dependencies import get_clickhouse
from flowsankey.clickhouse.connection import ClickHouseConnection
from flowsankey.utils.exceptions import StoreError

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(clickhouse: ClickHouseConnection = Depends(get_clickhouse)) -> dict:
    try:
        ok = await clickhouse.health_check()
        return {"status": "ready" if ok else "degraded", "clickhouse": ok}
    except StoreError as exc:
        return {"status": "not_ready", "error": str(exc)}
