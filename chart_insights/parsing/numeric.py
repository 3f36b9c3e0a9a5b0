"""
chart_insights/parsing/numeric.py

Currency- and percentage-aware numeric parsing shared by the classifier,
validator and aggregator.
"""

from __future__ import annotations

import math
import re
from typing import Any

from chart_insights.domain.cells import CellValue, NumberCell, TextCell, to_cell

MAX_SAFE_VALUE = 1e15

_FORMATTING_CHARS = re.compile(r"[$€£¥₹,\s%]")


def parse_numeric_cell(cell: CellValue) -> float | int | None:
    """
    Parse a tagged cell into a finite number, or None.
    """

    if isinstance(cell, NumberCell):
        value = cell.value
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if abs(value) > MAX_SAFE_VALUE:
            return None
        return value
    if isinstance(cell, TextCell):
        return _parse_numeric_text(cell.value)
    return None


def parse_numeric_value(value: Any) -> float | int | None:
    """
    Parse a raw value into a finite number.

    Accepts plain numbers and strings such as ``"$1,200.50"``, ``"45%"`` or
    the accounting form ``"(300)"``. Booleans, dates and anything unparseable
    yield ``None``.
    """

    return parse_numeric_cell(to_cell(value))


def _parse_numeric_text(text: str) -> float | None:
    cleaned = text.strip()
    if not cleaned:
        return None

    negative = cleaned.startswith("(") and cleaned.endswith(")")
    if negative:
        cleaned = cleaned[1:-1].strip()

    cleaned = _FORMATTING_CHARS.sub("", cleaned)
    if not cleaned:
        return None

    try:
        number = float(cleaned)
    except ValueError:
        return None

    if not math.isfinite(number) or abs(number) > MAX_SAFE_VALUE:
        return None
    return -number if negative else number
