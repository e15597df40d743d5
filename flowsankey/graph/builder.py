"""Turn weighted dimension tuples into a layered sankey graph.

Nodes are listed in the order they are first met while scanning rows in
the order the store returned them (by descending bps), each row from the
first dimension to the last. Links join values of adjacent dimensions;
their bps are summed over all rows and they are sorted by decreasing
bps, ties keeping the order in which each link was first met.

"Other" buckets are suffixed with their dimension name so that the
"Other" of one layer is never merged with the "Other" of another one.
"""

from __future__ import annotations

from typing import Sequence

from flowsankey.clickhouse.columns import OTHER, DimensionColumn
from flowsankey.models.schemas import SankeyGraph, SankeyLink, SankeyRow
from flowsankey.utils.exceptions import MalformedResultError


def node_label(value: str, column: DimensionColumn) -> str:
    if value == OTHER:
        return f"{OTHER} {column.name}"
    return value


def _check_rows(dimensions: Sequence[DimensionColumn], rows: Sequence[SankeyRow]) -> None:
    for index, row in enumerate(rows):
        if len(row.dimensions) != len(dimensions):
            raise MalformedResultError(
                f"row {index} has {len(row.dimensions)} values, expected {len(dimensions)}"
            )
        if row.bps < 0:
            raise MalformedResultError(f"row {index} has a negative weight ({row.bps})")


def build_sankey_graph(dimensions: Sequence[DimensionColumn], rows: Sequence[SankeyRow]) -> SankeyGraph:
    _check_rows(dimensions, rows)

    nodes: list[str] = []
    seen: set[str] = set()
    totals: dict[tuple[str, str], float] = {}
    first_seen: dict[tuple[str, str], int] = {}

    for row in rows:
        labels = [node_label(value, column) for value, column in zip(row.dimensions, dimensions)]
        for label in labels:
            if label not in seen:
                seen.add(label)
                nodes.append(label)
        for source, target in zip(labels, labels[1:]):
            key = (source, target)
            if key not in totals:
                totals[key] = 0.0
                first_seen[key] = len(first_seen)
            totals[key] += row.bps

    ordered = sorted(totals, key=lambda key: (-totals[key], first_seen[key]))
    links = [SankeyLink(source=source, target=target, bps=totals[(source, target)]) for source, target in ordered]

    return SankeyGraph(
        rows=[list(row.dimensions) for row in rows],
        bps=[row.bps for row in rows],
        nodes=nodes,
        links=links,
    )
