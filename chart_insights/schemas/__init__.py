"""
chart_insights/schemas package marker.
"""

from chart_insights.schemas.data_mapping import SLOT_NAMES, DataMapping

__all__ = ["DataMapping", "SLOT_NAMES"]
