"""
chart_insights package marker.

Column type/date inference, chart mapping validation and row aggregation
for automated chart generation over loosely typed tabular data.
"""

from chart_insights.classifiers import (
    classify_column,
    detect_date_columns,
    detect_date_with_confidence,
    get_best_date_column,
    is_date_column,
)
from chart_insights.domain import ColumnClassification, DatasetSchema, ValidationResult
from chart_insights.mappers import analyze_schema, assign_role
from chart_insights.parsing import (
    column_name_suggests_date,
    is_valid_date,
    parse_date_value,
    parse_numeric_value,
)
from chart_insights.schemas import DataMapping
from chart_insights.services import aggregate_by_granularity, aggregate_by_key
from chart_insights.validators import (
    ChartProposal,
    filter_valid_charts,
    get_field_type_help_text,
    is_field_allowed_for_chart,
    validate_chart_config,
    validate_mapping,
)

__all__ = [
    "ChartProposal",
    "ColumnClassification",
    "DataMapping",
    "DatasetSchema",
    "ValidationResult",
    "aggregate_by_granularity",
    "aggregate_by_key",
    "analyze_schema",
    "assign_role",
    "classify_column",
    "column_name_suggests_date",
    "detect_date_columns",
    "detect_date_with_confidence",
    "filter_valid_charts",
    "get_best_date_column",
    "get_field_type_help_text",
    "is_date_column",
    "is_field_allowed_for_chart",
    "is_valid_date",
    "parse_date_value",
    "parse_numeric_value",
    "validate_chart_config",
    "validate_mapping",
]
