"""
chart_insights/domain package marker.
"""

from chart_insights.domain.cells import (
    BoolCell,
    CellValue,
    DateLikeCell,
    NullCell,
    NumberCell,
    TextCell,
    to_cell,
)
from chart_insights.domain.models import (
    ColumnClassification,
    ColumnProfile,
    ColumnRelationship,
    DatasetSchema,
    DateConfidence,
    NumericStats,
    ValidationResult,
)
from chart_insights.domain.vocabulary import (
    AggregationMethod,
    ChartType,
    ColumnRole,
    ColumnType,
    Granularity,
)

__all__ = [
    "AggregationMethod",
    "BoolCell",
    "CellValue",
    "ChartType",
    "ColumnClassification",
    "ColumnProfile",
    "ColumnRelationship",
    "ColumnRole",
    "ColumnType",
    "DateConfidence",
    "DateLikeCell",
    "DatasetSchema",
    "Granularity",
    "NullCell",
    "NumberCell",
    "NumericStats",
    "TextCell",
    "ValidationResult",
    "to_cell",
]
