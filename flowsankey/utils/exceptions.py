"""Exception hierarchy for the sankey engine."""

from __future__ import annotations


class FlowSankeyError(Exception):
    """Base exception for all flowsankey errors."""


class InvalidRequestError(FlowSankeyError):
    """Request descriptor rejected before query generation."""


class UnknownDimensionError(InvalidRequestError):
    """Requested dimension is not part of the column registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown dimension: {name!r}")
        self.name = name


class StoreError(FlowSankeyError):
    """ClickHouse query execution failure (transport or server-side)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResultError(FlowSankeyError):
    """Store returned rows that do not match the requested dimensions."""
