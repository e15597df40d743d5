"""ClickHouse query templates for the flow sankey.

By default ``{table}`` and ``{timefilter}`` are left in the generated text.
Callers executing the query pass the resolved table and time predicate
instead (see ``flowsankey.clickhouse.templates``); they are spliced in
alongside the filter, so placeholder-looking text inside a filter is
never rewritten.
"""

from __future__ import annotations

from flowsankey.clickhouse.columns import DimensionColumn
from flowsankey.models.schemas import SankeyQuery

TABLE_PLACEHOLDER = "{table}"
TIMEFILTER_PLACEHOLDER = "{timefilter}"

SANKEY_TEMPLATE = """
WITH
 (SELECT MAX(TimeReceived) - MIN(TimeReceived) FROM {table} WHERE {where}) AS range,
 rows AS (SELECT {fields} FROM {table} WHERE {where} GROUP BY {fields} ORDER BY SUM(Bytes) DESC LIMIT {limit})
SELECT
 SUM(Bytes*SamplingRate*8/range) AS bps,
 [{buckets}] AS dimensions
FROM {table}
WHERE {where}
GROUP BY dimensions
ORDER BY bps DESC"""

HEALTH_CHECK = "SELECT 1 AS ok"


def where_clause(filter: str, timefilter: str = TIMEFILTER_PLACEHOLDER) -> str:
    if not filter:
        return timefilter
    return f"{timefilter} AND ({filter})"


def build_sankey_query(
    query: SankeyQuery,
    table: str = TABLE_PLACEHOLDER,
    timefilter: str = TIMEFILTER_PLACEHOLDER,
) -> tuple[str, list[DimensionColumn]]:
    """Render the sankey query and return it with the selected dimensions."""
    dimensions = list(query.dimensions)
    sql = SANKEY_TEMPLATE.format(
        table=table,
        where=where_clause(query.filter, timefilter),
        fields=", ".join(column.selectable() for column in dimensions),
        limit=query.limit,
        buckets=",\n  ".join(column.bucketed() for column in dimensions),
    )
    return sql, dimensions
