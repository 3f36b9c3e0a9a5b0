"""
chart_insights/mappers package marker.
"""

from chart_insights.mappers.role_mapper import assign_role, name_suggests_identifier, normalize_header
from chart_insights.mappers.schema_profiler import SchemaProfiler, analyze_schema
from chart_insights.mappers.usage_hints import detect_relationships, suggest_usage

__all__ = [
    "SchemaProfiler",
    "analyze_schema",
    "assign_role",
    "detect_relationships",
    "name_suggests_identifier",
    "normalize_header",
    "suggest_usage",
]
