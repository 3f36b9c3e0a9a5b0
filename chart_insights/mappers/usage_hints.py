"""
chart_insights/mappers/usage_hints.py

Chart usage hints and identifier relationships derived from column names,
types and cardinality. Consumed by chart recommendation alongside roles.
"""

from __future__ import annotations

from typing import Sequence

from chart_insights.domain.models import ColumnProfile, ColumnRelationship
from chart_insights.domain.vocabulary import ColumnType
from chart_insights.mappers.role_mapper import name_suggests_identifier, normalize_header

PIE_MAX_UNIQUE = 10
BAR_MAX_UNIQUE = 20
LOW_CARDINALITY_MAX = 5
HIGH_CARDINALITY_RATIO = 0.8

# Substring keywords in a lowercased column name -> usage tags.
NAME_HINTS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("date", "time"), ("time-series", "filtering", "x-axis", "temporal-analysis")),
    (
        ("amount", "price", "cost", "revenue", "spend", "budget"),
        ("measure", "y-axis", "aggregation", "currency"),
    ),
    (
        ("name", "title", "category", "campaign", "portfolio"),
        ("dimension", "grouping", "filtering"),
    ),
    (
        ("count", "total", "sum", "clicks", "impressions", "orders"),
        ("measure", "y-axis", "aggregation", "metric"),
    ),
    (("ctr", "rate", "roas", "percent", "%"), ("measure", "y-axis", "percentage", "kpi")),
    (
        ("country", "region", "city", "state", "location"),
        ("dimension", "geographic", "grouping", "filtering"),
    ),
    (
        ("status", "type", "channel", "source", "medium", "device"),
        ("dimension", "categorical", "grouping", "filtering"),
    ),
    (("targeting", "bidding", "strategy"), ("dimension", "categorical", "strategy-analysis")),
)

_RATE_WORDS = ("rate", "percent", "ctr")
_TOTAL_WORDS = ("total", "sum", "count")


def suggest_usage(
    column_name: str,
    column_type: str,
    *,
    unique_count: int,
    non_null_count: int,
) -> tuple[str, ...]:
    """
    Ordered, de-duplicated usage tags for one column.

    Name keywords come first, then type-specific tags, then a cardinality
    band. Columns without any value get no hints.
    """

    if non_null_count <= 0 or column_type == ColumnType.UNKNOWN:
        return ()

    lowered = column_name.lower()
    tags: list[str] = []

    if name_suggests_identifier(column_name):
        tags += ["identifier", "grouping"]
    for keywords, hint_tags in NAME_HINTS:
        if any(keyword in lowered for keyword in keywords):
            tags += hint_tags

    unique_ratio = unique_count / non_null_count
    tags += _type_hints(lowered, column_type, unique_count, unique_ratio)

    if unique_count == non_null_count:
        tags += ["identifier", "unique-key"]
    elif unique_ratio > HIGH_CARDINALITY_RATIO:
        tags += ["high-cardinality", "potential-identifier"]
    elif unique_count <= LOW_CARDINALITY_MAX:
        tags += ["low-cardinality", "binary-or-limited", "pie-chart"]
    elif unique_count <= BAR_MAX_UNIQUE:
        tags += ["moderate-cardinality", "grouping", "bar-chart"]

    return tuple(dict.fromkeys(tags))


def detect_relationships(profiles: Sequence[ColumnProfile]) -> tuple[ColumnRelationship, ...]:
    """
    Pair identifier columns with same-typed columns sharing their name stem.

    ``customer_id`` and ``customer_name`` (both text) yield
    ``customer_name -> customer_id``.
    """

    relationships: list[ColumnRelationship] = []
    for id_column in profiles:
        stem = _identifier_stem(id_column.name)
        if not stem:
            continue
        for other in profiles:
            if other is id_column or other.type != id_column.type:
                continue
            if stem in normalize_header(other.name):
                relationships.append(
                    ColumnRelationship(from_column=other.name, to_column=id_column.name)
                )
    return tuple(relationships)


def _type_hints(lowered: str, column_type: str, unique_count: int, unique_ratio: float) -> list[str]:
    if column_type == ColumnType.NUMBER:
        tags = ["measure", "y-axis", "aggregation", "comparison", "trend-analysis"]
        if any(word in lowered for word in _RATE_WORDS):
            tags += ["line-chart", "gauge-chart"]
        if any(word in lowered for word in _TOTAL_WORDS):
            tags += ["bar-chart", "scorecard"]
        return tags
    if column_type == ColumnType.CATEGORICAL:
        tags = ["dimension", "grouping", "filtering", "x-axis"]
        if unique_count <= PIE_MAX_UNIQUE:
            tags += ["pie-chart", "donut-chart"]
        if unique_count <= BAR_MAX_UNIQUE:
            tags += ["bar-chart", "column-chart"]
        return tags
    if column_type == ColumnType.DATE:
        return ["time-series", "x-axis", "filtering", "line-chart", "temporal-grouping"]
    if column_type == ColumnType.BOOLEAN:
        return ["filtering", "segmentation", "binary-analysis"]
    if unique_ratio > HIGH_CARDINALITY_RATIO:
        return ["identifier", "high-cardinality"]
    return ["dimension", "grouping", "filtering"]


def _identifier_stem(column_name: str) -> str:
    normalized = normalize_header(column_name)
    if not name_suggests_identifier(column_name) or not normalized.endswith("id"):
        return ""
    return normalized[: -len("id")]
