"""
chart_insights/classifiers package marker.
"""

from chart_insights.classifiers.date_detector import (
    detect_date_columns,
    detect_date_with_confidence,
    get_best_date_column,
    is_date_column,
)
from chart_insights.classifiers.type_classifier import classify_column, infer_value_type

__all__ = [
    "classify_column",
    "detect_date_columns",
    "detect_date_with_confidence",
    "get_best_date_column",
    "infer_value_type",
    "is_date_column",
]
