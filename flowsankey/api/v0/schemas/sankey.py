"""Request/response models for the sankey API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from flowsankey.models.schemas import SankeyLink


class SankeyRequest(BaseModel):
    start: datetime = Field(..., examples=["2022-04-10T15:45:10Z"])
    end: datetime = Field(..., examples=["2022-04-11T15:45:10Z"])
    dimensions: list[str] = Field(..., min_length=2, examples=[["SrcAS", "ExporterName"]])
    limit: int = Field(default=10, ge=1)
    filter: str = Field(default="", examples=["DstCountry = 'FR'"])


class SankeyResponse(BaseModel):
    rows: list[list[str]] = Field(default_factory=list)
    bps: list[float] = Field(default_factory=list)
    nodes: list[str] = Field(default_factory=list)
    links: list[SankeyLink] = Field(default_factory=list)


class DimensionInfo(BaseModel):
    name: str
    kind: str
