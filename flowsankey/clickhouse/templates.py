"""Time-window predicate substituted for ``{timefilter}`` in generated queries."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_CLICKHOUSE_DATETIME = "%Y-%m-%d %H:%M:%S"


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def time_filter(start: datetime, end: datetime) -> str:
    """Half-open ``[start, end)`` predicate on ``TimeReceived``, in UTC.

    ``TimeReceived`` has second precision: the lower bound is truncated and
    a fractional upper bound is rounded up, so the window never shrinks.
    """
    lower = as_utc(start).replace(microsecond=0)
    upper = as_utc(end)
    if upper.microsecond:
        upper = upper.replace(microsecond=0) + timedelta(seconds=1)
    return (
        f"TimeReceived >= toDateTime('{lower.strftime(_CLICKHOUSE_DATETIME)}', 'UTC') "
        f"AND TimeReceived < toDateTime('{upper.strftime(_CLICKHOUSE_DATETIME)}', 'UTC')"
    )
