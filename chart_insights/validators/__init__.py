"""
chart_insights/validators package marker.
"""

from chart_insights.validators.field_rules import get_field_type_help_text, is_field_allowed_for_chart
from chart_insights.validators.mapping_validator import (
    ChartProposal,
    MappingValidator,
    filter_valid_charts,
    validate_chart_config,
    validate_mapping,
)

__all__ = [
    "ChartProposal",
    "MappingValidator",
    "filter_valid_charts",
    "get_field_type_help_text",
    "is_field_allowed_for_chart",
    "validate_chart_config",
    "validate_mapping",
]
