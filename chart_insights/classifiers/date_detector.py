"""
chart_insights/classifiers/date_detector.py

Date column detection.

Two tiers are exposed and must stay consistent with each other:

* :func:`is_date_column` - boolean verdict, at least 80% of a small leading
  sample must be valid dates.
* :func:`detect_date_with_confidence` - 0-100 confidence from pattern match
  and generic parse ratios. A match ratio of 0.8 or more always yields a
  confidence of at least 90, so both tiers agree at that point.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Iterable, Mapping, Sequence

from chart_insights.config import ClassifierSettings, get_classifier_settings
from chart_insights.domain.cells import DateLikeCell, TextCell, is_blank, to_cell
from chart_insights.domain.models import DateConfidence
from chart_insights.parsing.dates import (
    MAX_YEAR,
    MIN_YEAR,
    column_name_suggests_date,
    is_pure_number_text,
    is_valid_date,
    match_date_pattern,
    parse_date_cell,
)

DATE_OBJECT_FORMAT = "date_object"


def detect_date_with_confidence(
    values: Iterable[Any],
    *,
    settings: ClassifierSettings | None = None,
) -> DateConfidence:
    """
    Score how likely a list of values is a date column.

    Pure numeric strings (other than four-digit years), numbers and booleans
    are never counted as dates but still count towards the denominator.

    Returns
    -------
    DateConfidence
        ``confidence`` in [0, 100]; ``is_date`` when it reaches the
        configured threshold (60 by default); ``format`` names the most
        common matched pattern.
    """
    settings = settings or get_classifier_settings()
    cells = [cell for cell in (to_cell(value) for value in values) if not is_blank(cell)]
    if not cells:
        return DateConfidence(is_date=False, confidence=0)

    match_count = 0
    parsable_count = 0
    format_counts: Counter[str] = Counter()

    for cell in cells:
        if isinstance(cell, DateLikeCell):
            match_count += 1
            parsable_count += 1
            format_counts[DATE_OBJECT_FORMAT] += 1
            continue
        if not isinstance(cell, TextCell):
            continue

        text = cell.value.strip()
        if is_pure_number_text(text):
            continue

        pattern_name = match_date_pattern(text)
        if pattern_name is not None:
            match_count += 1
            parsable_count += 1
            format_counts[pattern_name] += 1
        else:
            parsed = parse_date_cell(cell)
            if parsed is not None and MIN_YEAR <= parsed.year <= MAX_YEAR:
                parsable_count += 1

    total = len(cells)
    match_ratio = match_count / total
    parse_ratio = parsable_count / total
    confidence = _score(match_ratio, parse_ratio)
    dominant_format = format_counts.most_common(1)[0][0] if format_counts else None

    return DateConfidence(
        is_date=confidence >= settings.date_confidence_threshold,
        confidence=confidence,
        format=dominant_format,
    )


def is_date_column(
    rows: Sequence[Mapping[str, Any]],
    column: str,
    sample_size: int | None = None,
    *,
    settings: ClassifierSettings | None = None,
) -> bool:
    """
    Check whether a column holds dates, sampling its leading non-null values.

    Up to ``2 * sample_size`` leading rows are scanned so that sparse
    columns still yield ``sample_size`` candidates.
    """
    settings = settings or get_classifier_settings()
    if not rows:
        return False

    size = sample_size if sample_size is not None else settings.date_sample_size
    if size <= 0:
        return False

    samples = [
        row.get(column)
        for row in rows[: size * 2]
        if row.get(column) is not None
    ][:size]
    if not samples:
        return False

    valid_count = sum(1 for value in samples if is_valid_date(value))
    return valid_count >= len(samples) * settings.date_column_threshold


def detect_date_columns(
    rows: Sequence[Mapping[str, Any]],
    sample_size: int | None = None,
    *,
    settings: ClassifierSettings | None = None,
) -> list[str]:
    """
    Return every column of ``rows`` that looks like a date, in declaration order.
    """
    if not rows:
        return []
    return [
        column
        for column in rows[0].keys()
        if is_date_column(rows, column, sample_size, settings=settings)
    ]


def get_best_date_column(
    rows: Sequence[Mapping[str, Any]],
    *,
    settings: ClassifierSettings | None = None,
) -> str | None:
    """
    Pick the most likely date column.

    Columns whose name suggests a date and whose content passes detection
    win, with names containing "date" first. Otherwise the first
    content-detected column is returned.
    """
    if not rows:
        return None

    named = [
        column
        for column in rows[0].keys()
        if column_name_suggests_date(column) and is_date_column(rows, column, settings=settings)
    ]
    if named:
        for column in named:
            if "date" in column.lower():
                return column
        return named[0]

    detected = detect_date_columns(rows, settings=settings)
    return detected[0] if detected else None


def _score(match_ratio: float, parse_ratio: float) -> int:
    if match_ratio >= 0.8:
        confidence = 90 + (match_ratio - 0.8) * 50
    elif match_ratio >= 0.5:
        confidence = 70 + (match_ratio - 0.5) * 40
    elif parse_ratio >= 0.7:
        confidence = 50 + (parse_ratio - 0.7) * 67
    else:
        confidence = parse_ratio * 50
    return max(0, min(100, int(math.floor(confidence + 0.5))))
