"""
chart_insights/services package marker.
"""

from chart_insights.services.aggregation_service import (
    AggregationService,
    Bucket,
    aggregate_by_granularity,
    aggregate_by_key,
    bucket_for,
    reduce_values,
)

__all__ = [
    "AggregationService",
    "Bucket",
    "aggregate_by_granularity",
    "aggregate_by_key",
    "bucket_for",
    "reduce_values",
]
