"""Groupable flow columns and how each one renders inside a sankey query.

Every column is either ``plain`` (its raw value is displayed as-is) or
``dictionary`` (a numeric identifier shown alongside the name found in a
ClickHouse dictionary, e.g. ``64500: ACME``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from flowsankey.utils.exceptions import UnknownDimensionError

ColumnKind = Literal["plain", "dictionary"]

OTHER = "Other"
MISSING_NAME = "???"


@dataclass(frozen=True)
class DimensionColumn:
    name: str
    kind: ColumnKind = "plain"
    dictionary: str | None = None
    attribute: str | None = None

    def __post_init__(self) -> None:
        if self.kind == "dictionary" and not (self.dictionary and self.attribute):
            raise ValueError(f"{self.name}: dictionary columns need a dictionary and an attribute")

    def selectable(self) -> str:
        """Raw form used to select and group the column."""
        return self.name

    def bucketed(self) -> str:
        """Expression keeping top values and folding the rest into 'Other'."""
        if self.kind == "dictionary":
            shown = (
                f"concat(toString({self.name}), ': ', "
                f"dictGetOrDefault('{self.dictionary}', '{self.attribute}', {self.name}, '{MISSING_NAME}'))"
            )
        else:
            shown = self.name
        return f"if({self.name} IN (SELECT {self.name} FROM rows), {shown}, '{OTHER}')"


def _plain(name: str) -> DimensionColumn:
    return DimensionColumn(name=name)


def _dictionary(name: str, dictionary: str, attribute: str = "name") -> DimensionColumn:
    return DimensionColumn(name=name, kind="dictionary", dictionary=dictionary, attribute=attribute)


DIMENSION_COLUMNS: dict[str, DimensionColumn] = {
    column.name: column
    for column in (
        _plain("ExporterAddress"),
        _plain("ExporterName"),
        _plain("ExporterGroup"),
        _plain("SrcAddr"),
        _plain("DstAddr"),
        _dictionary("SrcAS", "asns"),
        _dictionary("DstAS", "asns"),
        _plain("SrcCountry"),
        _plain("DstCountry"),
        _plain("InIfName"),
        _plain("OutIfName"),
        _plain("InIfDescription"),
        _plain("OutIfDescription"),
        _plain("InIfSpeed"),
        _plain("OutIfSpeed"),
        _plain("InIfConnectivity"),
        _plain("OutIfConnectivity"),
        _plain("InIfProvider"),
        _plain("OutIfProvider"),
        _plain("InIfBoundary"),
        _plain("OutIfBoundary"),
        _plain("EType"),
        _dictionary("Proto", "protocols"),
        _plain("SrcPort"),
        _plain("DstPort"),
    )
}


def get_column(name: str) -> DimensionColumn:
    try:
        return DIMENSION_COLUMNS[name]
    except KeyError:
        raise UnknownDimensionError(name) from None
