"""Sankey graph service: validate, query ClickHouse, build the graph."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from pydantic import ValidationError

from flowsankey.clickhouse.connection import ClickHouseConnection
from flowsankey.clickhouse.queries import build_sankey_query
from flowsankey.clickhouse.templates import time_filter
from flowsankey.config import Settings
from flowsankey.graph.builder import build_sankey_graph
from flowsankey.models.schemas import SankeyGraph, SankeyQuery, SankeyRow
from flowsankey.utils.exceptions import InvalidRequestError, MalformedResultError
from flowsankey.utils.logging import get_logger

logger = get_logger(__name__)


class SankeyService:
    """Runs sankey requests against the flows table."""

    def __init__(self, clickhouse: ClickHouseConnection, settings: Settings) -> None:
        self._conn = clickhouse
        self._settings = settings

    def make_query(
        self,
        start: datetime,
        end: datetime,
        dimensions: Sequence[str],
        limit: int,
        filter: str = "",
    ) -> SankeyQuery:
        if limit > self._settings.SANKEY_MAX_LIMIT:
            raise InvalidRequestError(f"limit must not exceed {self._settings.SANKEY_MAX_LIMIT}")
        if len(dimensions) > self._settings.SANKEY_MAX_DIMENSIONS:
            raise InvalidRequestError(
                f"at most {self._settings.SANKEY_MAX_DIMENSIONS} dimensions are allowed"
            )
        return SankeyQuery.from_names(start, end, dimensions, limit, filter)

    async def get_sankey(self, query: SankeyQuery) -> SankeyGraph:
        sql, dimensions = build_sankey_query(
            query,
            table=self._settings.FLOWS_TABLE,
            timefilter=time_filter(query.start, query.end),
        )
        logger.debug("sankey_query_built", dimensions=query.dimension_names, limit=query.limit, sql=sql)

        records = await self._conn.execute_read(sql)
        try:
            rows = [SankeyRow.model_validate(record) for record in records]
        except ValidationError as exc:
            raise MalformedResultError(f"unexpected row from ClickHouse: {exc}") from exc

        graph = build_sankey_graph(dimensions, rows)
        logger.info(
            "sankey_built",
            dimensions=query.dimension_names,
            rows=len(graph.rows),
            nodes=len(graph.nodes),
            links=len(graph.links),
        )
        return graph
