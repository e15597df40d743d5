"""Export a sankey graph of recent flows from ClickHouse to a JSON file."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime, timedelta, timezone

from flowsankey.clickhouse.connection import ClickHouseConnection
from flowsankey.config import get_settings
from flowsankey.services.sankey_service import SankeyService
from flowsankey.utils.exceptions import FlowSankeyError
from flowsankey.utils.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("dimensions", nargs="+", help="Ordered dimensions, e.g. SrcAS InIfProvider ExporterName")
    parser.add_argument("--hours", type=float, default=24.0, help="Window size, ending now")
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--filter", default="", help="Raw ClickHouse predicate")
    parser.add_argument("--output", default="sankey_export.json")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(log_level="INFO", log_format="console")
    settings = get_settings()

    end = datetime.now(timezone.utc).replace(microsecond=0)
    start = end - timedelta(hours=args.hours)

    conn = ClickHouseConnection(settings)
    try:
        await conn.connect()
        service = SankeyService(conn, settings)
        query = service.make_query(start, end, args.dimensions, args.limit, args.filter)
        graph = await service.get_sankey(query)
    except FlowSankeyError as exc:
        print(f"Export failed: {exc}", file=sys.stderr)
        return 1
    finally:
        await conn.close()

    with open(args.output, "w") as f:
        json.dump(graph.model_dump(), f, indent=2)
    print(f"Sankey exported to {args.output}")
    print(f"  Nodes: {len(graph.nodes)}")
    print(f"  Links: {len(graph.links)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
