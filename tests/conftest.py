"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest


@pytest.fixture(autouse=True)
def _env_setup(monkeypatch):
    """Set required environment variables for tests."""
    monkeypatch.setenv("CLICKHOUSE_URL", "http://localhost:8123")
    monkeypatch.setenv("CLICKHOUSE_DATABASE", "default")
    monkeypatch.setenv("CLICKHOUSE_USER", "default")
    monkeypatch.setenv("CLICKHOUSE_PASSWORD", "")
    monkeypatch.setenv("FLOWS_TABLE", "flows")
    monkeypatch.setenv("LOG_FORMAT", "console")


@pytest.fixture
def settings():
    from flowsankey.config import Settings

    return Settings(CLICKHOUSE_URL="http://localhost:8123", FLOWS_TABLE="flows")


@pytest.fixture
def mock_clickhouse():
    conn = AsyncMock()
    conn.execute_read = AsyncMock(return_value=[])
    conn.health_check = AsyncMock(return_value=True)
    return conn


@pytest.fixture
def flow_records() -> list[dict]:
    """Rows for SrcAS, InIfProvider, ExporterName as ClickHouse returns them."""
    return [
        {"bps": 9677, "dimensions": ["AS100", "Other", "router1"]},
        {"bps": 9472, "dimensions": ["AS300", "provider1", "Other"]},
        {"bps": 7593, "dimensions": ["AS300", "provider2", "router1"]},
        {"bps": 7234, "dimensions": ["AS200", "provider1", "Other"]},
        {"bps": 6006, "dimensions": ["AS100", "provider1", "Other"]},
        {"bps": 5988, "dimensions": ["Other", "provider1", "Other"]},
        {"bps": 4675, "dimensions": ["AS200", "provider3", "Other"]},
        {"bps": 4348, "dimensions": ["AS200", "Other", "router2"]},
        {"bps": 3999, "dimensions": ["AS100", "provider3", "Other"]},
        {"bps": 3978, "dimensions": ["AS100", "provider3", "router2"]},
        {"bps": 3623, "dimensions": ["Other", "Other", "router1"]},
        {"bps": 3080, "dimensions": ["AS300", "provider3", "router2"]},
        {"bps": 2915, "dimensions": ["AS300", "Other", "router1"]},
        {"bps": 2623, "dimensions": ["AS100", "provider1", "router1"]},
        {"bps": 2482, "dimensions": ["AS200", "provider2", "router2"]},
        {"bps": 2234, "dimensions": ["AS100", "provider2", "Other"]},
        {"bps": 1360, "dimensions": ["AS200", "Other", "router1"]},
        {"bps": 975, "dimensions": ["AS300", "Other", "Other"]},
        {"bps": 717, "dimensions": ["AS200", "provider3", "router2"]},
        {"bps": 621, "dimensions": ["Other", "Other", "Other"]},
        {"bps": 159, "dimensions": ["Other", "provider1", "router1"]},
    ]


@pytest.fixture
def expected_nodes() -> list[str]:
    return [
        "AS100",
        "Other InIfProvider",
        "router1",
        "AS300",
        "provider1",
        "Other ExporterName",
        "provider2",
        "AS200",
        "Other SrcAS",
        "provider3",
        "router2",
    ]


@pytest.fixture
def expected_links() -> list[dict]:
    return [
        {"source": "provider1", "target": "Other ExporterName", "bps": 9472 + 7234 + 6006 + 5988},
        {"source": "Other InIfProvider", "target": "router1", "bps": 9677 + 3623 + 2915 + 1360},
        {"source": "AS100", "target": "Other InIfProvider", "bps": 9677},
        {"source": "AS300", "target": "provider1", "bps": 9472},
        {"source": "provider3", "target": "Other ExporterName", "bps": 4675 + 3999},
        {"source": "AS100", "target": "provider1", "bps": 6006 + 2623},
        {"source": "AS100", "target": "provider3", "bps": 3999 + 3978},
        {"source": "provider3", "target": "router2", "bps": 3978 + 3080 + 717},
        {"source": "AS300", "target": "provider2", "bps": 7593},
        {"source": "provider2", "target": "router1", "bps": 7593},
        {"source": "AS200", "target": "provider1", "bps": 7234},
        {"source": "Other SrcAS", "target": "provider1", "bps": 5988 + 159},
        {"source": "AS200", "target": "Other InIfProvider", "bps": 4348 + 1360},
        {"source": "AS200", "target": "provider3", "bps": 4675 + 717},
        {"source": "Other InIfProvider", "target": "router2", "bps": 4348},
        {"source": "Other SrcAS", "target": "Other InIfProvider", "bps": 3623 + 621},
        {"source": "AS300", "target": "Other InIfProvider", "bps": 2915 + 975},
        {"source": "AS300", "target": "provider3", "bps": 3080},
        {"source": "provider1", "target": "router1", "bps": 2623 + 159},
        {"source": "AS200", "target": "provider2", "bps": 2482},
        {"source": "provider2", "target": "router2", "bps": 2482},
        {"source": "AS100", "target": "provider2", "bps": 2234},
        {"source": "provider2", "target": "Other ExporterName", "bps": 2234},
        {"source": "Other InIfProvider", "target": "Other ExporterName", "bps": 975 + 621},
    ]
