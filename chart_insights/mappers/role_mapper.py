"""
chart_insights/mappers/role_mapper.py

Maps an inferred column type plus column-name heuristics to a semantic role.
"""

from __future__ import annotations

import re

from chart_insights.domain.vocabulary import ColumnRole, ColumnType

IDENTIFIER_NAMES: tuple[str, ...] = ("id", "uuid", "guid", "key", "sku")

CALENDAR_PART_NAMES: tuple[str, ...] = ("year", "month", "quarter", "week", "day", "hour")

# Free-text columns with all-distinct values above this size read as keys.
IDENTIFIER_MIN_ROWS = 20

_CAMEL_ID = re.compile(r"[a-z0-9](Id|ID|Key|Uuid|UUID)$")
_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


def name_tokens(header: str) -> list[str]:
    """
    Split a column name into lowercase tokens on separators.
    """

    return [token for token in _TOKEN_SPLIT.split(header.strip().lower()) if token]


def name_suggests_identifier(column_name: str) -> bool:
    """
    True for names like ``id``, ``customer_id``, ``orderId`` or ``SKU``.
    """

    if _CAMEL_ID.search(column_name.strip()):
        return True
    tokens = name_tokens(column_name)
    if not tokens:
        return False
    return tokens[-1] in IDENTIFIER_NAMES or normalize_header(column_name) in IDENTIFIER_NAMES


def assign_role(
    column_name: str,
    column_type: str,
    *,
    unique_count: int = 0,
    non_null_count: int = 0,
) -> str:
    """
    Derive the analysis role of a column.

    Order of precedence: unknown type, identifier-like name, date type,
    calendar-part numeric names, numeric metrics, all-distinct free text,
    then dimension for everything else.
    """

    if column_type == ColumnType.UNKNOWN:
        return ColumnRole.UNKNOWN

    if name_suggests_identifier(column_name):
        return ColumnRole.IDENTIFIER

    if column_type == ColumnType.DATE:
        return ColumnRole.TIMESTAMP

    if column_type == ColumnType.NUMBER:
        if normalize_header(column_name) in CALENDAR_PART_NAMES:
            return ColumnRole.TIMESTAMP
        return ColumnRole.METRIC

    if (
        column_type == ColumnType.STRING
        and non_null_count > IDENTIFIER_MIN_ROWS
        and unique_count == non_null_count
    ):
        return ColumnRole.IDENTIFIER

    return ColumnRole.DIMENSION
