"""
chart_insights/parsing package marker.
"""

from chart_insights.parsing.dates import (
    DATE_NAME_KEYWORDS,
    DATE_PATTERNS,
    column_name_suggests_date,
    is_valid_date,
    looks_like_date,
    match_date_pattern,
    parse_date_cell,
    parse_date_value,
)
from chart_insights.parsing.numeric import parse_numeric_cell, parse_numeric_value

__all__ = [
    "DATE_NAME_KEYWORDS",
    "DATE_PATTERNS",
    "column_name_suggests_date",
    "is_valid_date",
    "looks_like_date",
    "match_date_pattern",
    "parse_date_cell",
    "parse_date_value",
    "parse_numeric_cell",
    "parse_numeric_value",
]
