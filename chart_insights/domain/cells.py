"""
chart_insights/domain/cells.py

Tagged cell values for loosely typed dataset rows.

Every raw value read from a row is converted once with :func:`to_cell`;
classification code dispatches on the resulting cell class instead of
probing the raw Python object repeatedly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class NullCell:
    """Absent value (``None`` or NaN)."""


@dataclass(frozen=True)
class BoolCell:
    value: bool


@dataclass(frozen=True)
class NumberCell:
    value: int | float


@dataclass(frozen=True)
class TextCell:
    value: str


@dataclass(frozen=True)
class DateLikeCell:
    value: date


CellValue = Union[NullCell, BoolCell, NumberCell, TextCell, DateLikeCell]

NULL = NullCell()


def to_cell(raw: Any) -> CellValue:
    """
    Wrap a raw row value into its tagged cell.

    ``bool`` is checked before numbers because it subclasses ``int``.
    """

    if raw is None:
        return NULL
    if isinstance(raw, bool):
        return BoolCell(raw)
    if isinstance(raw, (int, float, Decimal)):
        number = raw if isinstance(raw, int) else float(raw)
        if isinstance(number, float) and math.isnan(number):
            return NULL
        return NumberCell(number)
    if isinstance(raw, (datetime, date)):
        return DateLikeCell(raw)
    if isinstance(raw, str):
        return TextCell(raw)
    return TextCell(str(raw))


def is_blank(cell: CellValue) -> bool:
    """
    Return True for null cells and whitespace-only text.
    """

    if isinstance(cell, NullCell):
        return True
    if isinstance(cell, TextCell):
        return cell.value.strip() == ""
    return False


def cell_text(cell: CellValue) -> str:
    """
    Render a cell the way a loosely typed caller would stringify it.
    """

    if isinstance(cell, NullCell):
        return ""
    if isinstance(cell, BoolCell):
        return "true" if cell.value else "false"
    if isinstance(cell, NumberCell):
        value = cell.value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(cell, DateLikeCell):
        return cell.value.isoformat()
    return cell.value
