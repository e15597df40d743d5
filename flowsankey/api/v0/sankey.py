"""Sankey API endpoints for the console flow-graph widget."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from flowsankey.api.dependencies import get_sankey_service
from flowsankey.api.v0.schemas.sankey import DimensionInfo, SankeyRequest, SankeyResponse
from flowsankey.clickhouse.columns import DIMENSION_COLUMNS
from flowsankey.services.sankey_service import SankeyService

router = APIRouter(prefix="/console/sankey", tags=["sankey"])


@router.post("", response_model=SankeyResponse)
async def sankey(
    request: SankeyRequest,
    service: SankeyService = Depends(get_sankey_service),
) -> SankeyResponse:
    """Top flows between the requested dimensions, as sankey nodes and links."""
    query = service.make_query(
        start=request.start,
        end=request.end,
        dimensions=request.dimensions,
        limit=request.limit,
        filter=request.filter,
    )
    graph = await service.get_sankey(query)
    return SankeyResponse(**graph.model_dump())


@router.get("/dimensions", response_model=list[DimensionInfo])
async def dimensions() -> list[DimensionInfo]:
    return [DimensionInfo(name=column.name, kind=column.kind) for column in DIMENSION_COLUMNS.values()]
