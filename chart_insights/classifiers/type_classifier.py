"""
chart_insights/classifiers/type_classifier.py

Per-column type inference.
"""

from __future__ import annotations

from typing import Any, Iterable

from chart_insights.classifiers.date_detector import detect_date_with_confidence
from chart_insights.config import ClassifierSettings, get_classifier_settings
from chart_insights.domain.cells import BoolCell, CellValue, TextCell, cell_text, is_blank, to_cell
from chart_insights.domain.models import ColumnClassification
from chart_insights.domain.vocabulary import ColumnType
from chart_insights.parsing.numeric import parse_numeric_cell

BOOLEAN_TOKENS: frozenset[str] = frozenset(
    {"true", "false", "yes", "no", "y", "n", "t", "f", "on", "off", "1", "0"}
)


def classify_column(
    values: Iterable[Any],
    *,
    settings: ClassifierSettings | None = None,
) -> ColumnClassification:
    """
    Infer a column's type and date verdict from its values.

    Checks run in order: date (confidence tier), number, boolean,
    categorical (distinct/non-blank below ``categorical_ratio``), string.
    Empty or all-blank input yields an ``unknown`` classification.
    """

    settings = settings or get_classifier_settings()
    raw_values = list(values)
    cells = [cell for cell in (to_cell(value) for value in raw_values) if not is_blank(cell)]
    if not cells:
        return ColumnClassification.unknown()

    date_result = detect_date_with_confidence(raw_values, settings=settings)
    if date_result.is_date:
        return ColumnClassification(
            type=ColumnType.DATE,
            is_date=True,
            date_confidence=date_result.confidence,
            date_format=date_result.format,
        )

    return ColumnClassification(
        type=infer_value_type(cells, settings=settings),
        is_date=False,
        date_confidence=date_result.confidence,
        date_format=date_result.format,
    )


def infer_value_type(
    cells: list[CellValue],
    *,
    settings: ClassifierSettings | None = None,
) -> str:
    """
    Non-date type inference over already-filtered, non-blank cells.
    """

    settings = settings or get_classifier_settings()
    if not cells:
        return ColumnType.UNKNOWN

    if all(parse_numeric_cell(cell) is not None for cell in cells):
        return ColumnType.NUMBER

    if all(_is_boolean_like(cell) for cell in cells):
        return ColumnType.BOOLEAN

    if all(isinstance(cell, TextCell) for cell in cells):
        distinct = {cell.value.strip() for cell in cells if isinstance(cell, TextCell)}
        if len(distinct) / len(cells) < settings.categorical_ratio:
            return ColumnType.CATEGORICAL

    return ColumnType.STRING


def _is_boolean_like(cell: CellValue) -> bool:
    if isinstance(cell, BoolCell):
        return True
    return cell_text(cell).strip().lower() in BOOLEAN_TOKENS
