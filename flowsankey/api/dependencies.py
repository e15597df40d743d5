"""Shared FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from flowsankey.clickhouse.connection import ClickHouseConnection
from flowsankey.config import Settings, get_settings
from flowsankey.services.sankey_service import SankeyService

_clickhouse_conn: ClickHouseConnection | None = None


def set_clickhouse_conn(conn: ClickHouseConnection | None) -> None:
    global _clickhouse_conn
    _clickhouse_conn = conn


def get_clickhouse() -> ClickHouseConnection:
    if _clickhouse_conn is None:
        raise RuntimeError("ClickHouse not initialized")
    return _clickhouse_conn


def get_sankey_service(
    clickhouse: ClickHouseConnection = Depends(get_clickhouse),
    settings: Settings = Depends(get_settings),
) -> SankeyService:
    return SankeyService(clickhouse, settings)
