"""Internal models for data flowing through the sankey pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from pydantic import BaseModel, Field

from flowsankey.clickhouse.columns import DimensionColumn, get_column
from flowsankey.clickhouse.templates import as_utc
from flowsankey.utils.exceptions import InvalidRequestError


# ── Request descriptor ───────────────────────────────────────────────


@dataclass(frozen=True)
class SankeyQuery:
    """One sankey request: a half-open time window, the ordered dimensions
    (their order is the layer order of the graph), the number of top
    dimension tuples to keep and an optional raw filter predicate.
    """

    start: datetime
    end: datetime
    dimensions: tuple[DimensionColumn, ...]
    limit: int
    filter: str = ""

    def __post_init__(self) -> None:
        if len(self.dimensions) < 2:
            raise InvalidRequestError("at least two dimensions are required")
        if self.limit < 1:
            raise InvalidRequestError("limit must be a positive integer")
        if as_utc(self.end) <= as_utc(self.start):
            raise InvalidRequestError("end must be after start")

    @classmethod
    def from_names(
        cls,
        start: datetime,
        end: datetime,
        dimensions: Sequence[str],
        limit: int,
        filter: str = "",
    ) -> SankeyQuery:
        return cls(
            start=start,
            end=end,
            dimensions=tuple(get_column(name) for name in dimensions),
            limit=limit,
            filter=filter.strip(),
        )

    @property
    def dimension_names(self) -> list[str]:
        return [column.name for column in self.dimensions]


# ── Store rows and graph ─────────────────────────────────────────────


class SankeyRow(BaseModel):
    bps: float
    dimensions: list[str]


class SankeyLink(BaseModel):
    source: str
    target: str
    bps: float


class SankeyGraph(BaseModel):
    rows: list[list[str]] = Field(default_factory=list)
    bps: list[float] = Field(default_factory=list)
    nodes: list[str] = Field(default_factory=list)
    links: list[SankeyLink] = Field(default_factory=list)
