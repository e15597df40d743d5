"""Async ClickHouse client over the HTTP interface."""

from __future__ import annotations

import json

import httpx

from flowsankey.clickhouse.queries import HEALTH_CHECK
from flowsankey.config import Settings
from flowsankey.utils.exceptions import StoreError
from flowsankey.utils.logging import get_logger

logger = get_logger(__name__)


class ClickHouseConnection:
    """Manages a pooled ``httpx.AsyncClient`` pointed at ClickHouse.

    Designed for use with FastAPI lifespan events. Every query is sent as
    the POST body and answered in ``JSONEachRow`` format.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self._settings.CLICKHOUSE_URL,
            params={"database": self._settings.CLICKHOUSE_DATABASE},
            headers={
                "X-ClickHouse-User": self._settings.CLICKHOUSE_USER,
                "X-ClickHouse-Key": self._settings.CLICKHOUSE_PASSWORD,
            },
            timeout=self._settings.CLICKHOUSE_TIMEOUT,
            transport=self._transport,
        )
        try:
            await self.health_check()
        except StoreError:
            await self.close()
            raise
        logger.info("clickhouse_connected", url=self._settings.CLICKHOUSE_URL)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("clickhouse_disconnected")

    async def health_check(self) -> bool:
        rows = await self.execute_read(HEALTH_CHECK)
        return bool(rows) and rows[0].get("ok") == 1

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("ClickHouse client not initialized, call connect() first")
        return self._client

    async def execute_read(self, query: str) -> list[dict]:
        body = f"{query}\nFORMAT JSONEachRow"
        try:
            response = await self.client.post("/", content=body.encode())
        except httpx.HTTPError as exc:
            logger.error("clickhouse_unreachable", error=str(exc))
            raise StoreError(f"ClickHouse request failed: {exc}") from exc

        if response.status_code != 200:
            message = response.text.strip()
            logger.error(
                "clickhouse_query_failed",
                status=response.status_code,
                error=message,
            )
            raise StoreError(message or f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            return [json.loads(line) for line in response.text.splitlines() if line.strip()]
        except json.JSONDecodeError as exc:
            raise StoreError(f"unreadable ClickHouse answer: {exc}") from exc
