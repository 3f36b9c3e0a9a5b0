"""
chart_insights/domain/vocabulary.py

Fixed vocabularies shared by the classifier, validator and aggregator.
"""

from __future__ import annotations

from typing import Literal


class ColumnType:
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    CATEGORICAL = "categorical"
    UNKNOWN = "unknown"


class ColumnRole:
    METRIC = "metric"
    DIMENSION = "dimension"
    TIMESTAMP = "timestamp"
    IDENTIFIER = "identifier"
    UNKNOWN = "unknown"


class ChartType:
    LINE = "line"
    BAR = "bar"
    AREA = "area"
    SCATTER = "scatter"
    PIE = "pie"
    SCORECARD = "scorecard"
    TABLE = "table"
    COMBO = "combo"
    WATERFALL = "waterfall"
    HEATMAP = "heatmap"
    GAUGE = "gauge"
    COHORT = "cohort"
    BULLET = "bullet"
    TREEMAP = "treemap"
    SPARKLINE = "sparkline"
    SANKEY = "sankey"


class Granularity:
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class AggregationMethod:
    SUM = "sum"
    AVG = "avg"
    COUNT = "count"
    MIN = "min"
    MAX = "max"
    DISTINCT = "distinct"


ColumnTypeName = Literal["string", "number", "boolean", "date", "categorical", "unknown"]
ColumnRoleName = Literal["metric", "dimension", "timestamp", "identifier", "unknown"]
GranularityName = Literal["day", "week", "month", "quarter", "year"]
AggregationMethodName = Literal["sum", "avg", "count", "min", "max", "distinct"]

CHART_TYPES: frozenset[str] = frozenset(
    {
        ChartType.LINE,
        ChartType.BAR,
        ChartType.AREA,
        ChartType.SCATTER,
        ChartType.PIE,
        ChartType.SCORECARD,
        ChartType.TABLE,
        ChartType.COMBO,
        ChartType.WATERFALL,
        ChartType.HEATMAP,
        ChartType.GAUGE,
        ChartType.COHORT,
        ChartType.BULLET,
        ChartType.TREEMAP,
        ChartType.SPARKLINE,
        ChartType.SANKEY,
    }
)

GRANULARITIES: tuple[str, ...] = (
    Granularity.DAY,
    Granularity.WEEK,
    Granularity.MONTH,
    Granularity.QUARTER,
    Granularity.YEAR,
)

AGGREGATION_METHODS: tuple[str, ...] = (
    AggregationMethod.SUM,
    AggregationMethod.AVG,
    AggregationMethod.COUNT,
    AggregationMethod.MIN,
    AggregationMethod.MAX,
    AggregationMethod.DISTINCT,
)
