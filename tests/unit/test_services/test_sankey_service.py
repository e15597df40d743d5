"""Unit tests for the sankey service."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from flowsankey.services.sankey_service import SankeyService
from flowsankey.utils.exceptions import InvalidRequestError, MalformedResultError, StoreError

START = datetime(2022, 4, 10, 15, 45, 10, tzinfo=timezone.utc)
END = datetime(2022, 4, 11, 15, 45, 10, tzinfo=timezone.utc)


@pytest.fixture
def service(mock_clickhouse, settings):
    return SankeyService(mock_clickhouse, settings)


@pytest.mark.asyncio
async def test_get_sankey_empty(service):
    query = service.make_query(START, END, ["SrcAS", "ExporterName"], 5)
    graph = await service.get_sankey(query)
    assert graph.model_dump() == {"rows": [], "bps": [], "nodes": [], "links": []}


@pytest.mark.asyncio
async def test_get_sankey_resolves_placeholders(service, mock_clickhouse):
    query = service.make_query(START, END, ["SrcAS", "ExporterName"], 5, "DstCountry = 'FR'")
    await service.get_sankey(query)

    mock_clickhouse.execute_read.assert_called_once()
    sql = mock_clickhouse.execute_read.call_args.args[0]
    assert "{table}" not in sql
    assert "{timefilter}" not in sql
    assert "FROM flows WHERE TimeReceived >= toDateTime('2022-04-10 15:45:10', 'UTC')" in sql
    assert "LIMIT 5" in sql
    assert sql.count("AND (DstCountry = 'FR')") == 3


@pytest.mark.asyncio
async def test_get_sankey_builds_graph(service, mock_clickhouse, flow_records, expected_nodes, expected_links):
    mock_clickhouse.execute_read = AsyncMock(return_value=flow_records)
    query = service.make_query(START, END, ["SrcAS", "InIfProvider", "ExporterName"], 10)

    graph = await service.get_sankey(query)

    assert graph.nodes == expected_nodes
    assert [link.model_dump() for link in graph.links] == expected_links
    assert graph.bps == [record["bps"] for record in flow_records]


@pytest.mark.asyncio
async def test_store_error_propagates(service, mock_clickhouse):
    mock_clickhouse.execute_read = AsyncMock(side_effect=StoreError("Code: 241. Memory limit exceeded", 500))
    query = service.make_query(START, END, ["SrcAS", "ExporterName"], 5)
    with pytest.raises(StoreError, match="Memory limit"):
        await service.get_sankey(query)


@pytest.mark.asyncio
async def test_unexpected_row_shape(service, mock_clickhouse):
    mock_clickhouse.execute_read = AsyncMock(return_value=[{"weight": 1, "dims": ["a", "b"]}])
    query = service.make_query(START, END, ["SrcAS", "ExporterName"], 5)
    with pytest.raises(MalformedResultError):
        await service.get_sankey(query)


def test_limit_above_maximum(service, settings):
    with pytest.raises(InvalidRequestError):
        service.make_query(START, END, ["SrcAS", "ExporterName"], settings.SANKEY_MAX_LIMIT + 1)


def test_too_many_dimensions(service, settings):
    dimensions = ["SrcAS", "DstAS"] * settings.SANKEY_MAX_DIMENSIONS
    with pytest.raises(InvalidRequestError):
        service.make_query(START, END, dimensions, 5)


@pytest.mark.asyncio
async def test_placeholder_text_in_filter_is_kept(service, mock_clickhouse):
    query = service.make_query(START, END, ["SrcAS", "ExporterName"], 5, "ExporterName = '{table}'")
    await service.get_sankey(query)

    sql = mock_clickhouse.execute_read.call_args.args[0]
    assert sql.count("AND (ExporterName = '{table}')") == 3
    assert "FROM {table}" not in sql
