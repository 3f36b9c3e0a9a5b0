"""
chart_insights/mappers/schema_profiler.py

Dataset schema profiling: type, date confidence, role and summary
statistics for every column of a row set.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import numpy as np

from chart_insights.classifiers.type_classifier import classify_column
from chart_insights.config import ClassifierSettings, get_classifier_settings
from chart_insights.domain.cells import CellValue, is_blank, to_cell
from chart_insights.domain.models import ColumnClassification, ColumnProfile, DatasetSchema, NumericStats
from chart_insights.domain.vocabulary import ColumnType
from chart_insights.logging_utils import NULL_LOGGER, DiagnosticLogger
from chart_insights.mappers.role_mapper import assign_role
from chart_insights.mappers.usage_hints import detect_relationships, suggest_usage
from chart_insights.parsing.dates import column_name_suggests_date
from chart_insights.parsing.numeric import parse_numeric_cell

SAMPLE_VALUE_LIMIT = 5
NAME_BOOST = 20
NAME_BOOST_MIN_CONFIDENCE = 30


class SchemaProfiler:
    """
    Builds a :class:`DatasetSchema` from in-memory rows.

    Responsibilities:
        - Classify each column (type, date confidence).
        - Boost the reported date confidence when the column name agrees.
        - Attach a role, usage hints and, for numeric columns, summary statistics.
        - Pair identifier columns with columns that reference them.

    Not responsible for:
        - Business domain inference, free-text descriptions or chart recommendation.
        - Caching; every call recomputes from the rows given.
    """

    def __init__(
        self,
        *,
        settings: ClassifierSettings | None = None,
        logger: DiagnosticLogger | None = None,
    ) -> None:
        self._settings = settings or get_classifier_settings()
        self._logger = logger or NULL_LOGGER

    def analyze(self, rows: Sequence[Mapping[str, Any]]) -> DatasetSchema:
        """
        Profile every column of ``rows`` in declaration order.

        Args:
            rows: Rows sharing the same column set. The first row's keys
                  define the column order.

        Returns:
            DatasetSchema with one ColumnProfile per column; an empty
            schema for an empty row set.
        """
        if not rows:
            return DatasetSchema(row_count=0, column_count=0)

        columns = list(rows[0].keys())
        profiles = tuple(
            self._profile_column(name, [row.get(name) for row in rows])
            for name in columns
        )
        self._logger.log(
            "schema_profiled",
            row_count=len(rows),
            column_count=len(columns),
            types={profile.name: profile.type for profile in profiles},
        )
        return DatasetSchema(
            row_count=len(rows),
            column_count=len(columns),
            columns=profiles,
            relationships=detect_relationships(profiles),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _profile_column(self, name: str, values: list[Any]) -> ColumnProfile:
        cells = [to_cell(value) for value in values]
        present = [cell for cell in cells if not is_blank(cell)]
        null_count = len(cells) - len(present)
        unique_count = len(set(present))

        classification = classify_column(values, settings=self._settings)
        confidence, reason = self._date_signal(name, classification)

        return ColumnProfile(
            name=name,
            type=classification.type,
            role=assign_role(
                name,
                classification.type,
                unique_count=unique_count,
                non_null_count=len(present),
            ),
            is_date=classification.is_date,
            date_confidence=confidence,
            date_format=classification.date_format,
            detection_reason=reason,
            unique_count=unique_count,
            null_count=null_count,
            null_percentage=round(null_count / len(cells) * 100, 2) if cells else 0.0,
            sample_values=self._sample_values(values),
            stats=self._numeric_stats(present) if classification.type == ColumnType.NUMBER else None,
            suggested_usage=suggest_usage(
                name,
                classification.type,
                unique_count=unique_count,
                non_null_count=len(present),
            ),
        )

    @staticmethod
    def _date_signal(name: str, classification: ColumnClassification) -> tuple[int, str]:
        """
        Reported confidence and reason; the name boost never changes the type.
        """
        confidence = classification.date_confidence
        if column_name_suggests_date(name) and confidence > NAME_BOOST_MIN_CONFIDENCE:
            return min(100, confidence + NAME_BOOST), "Column name and pattern match"
        if confidence > 0:
            return confidence, "Pattern match"
        return confidence, ""

    @staticmethod
    def _sample_values(values: list[Any]) -> tuple[Any, ...]:
        samples: list[Any] = []
        seen: set[CellValue] = set()
        for value in values:
            cell = to_cell(value)
            if is_blank(cell) or cell in seen:
                continue
            seen.add(cell)
            samples.append(value)
            if len(samples) >= SAMPLE_VALUE_LIMIT:
                break
        return tuple(samples)

    @staticmethod
    def _numeric_stats(cells: list[CellValue]) -> NumericStats | None:
        numbers = [parse_numeric_cell(cell) for cell in cells]
        array = np.asarray([value for value in numbers if value is not None], dtype=np.float64)
        if array.size == 0:
            return None
        return NumericStats(
            min=float(np.min(array)),
            max=float(np.max(array)),
            mean=float(np.mean(array)),
            median=float(np.median(array)),
            std=float(np.std(array)),
        )


def analyze_schema(
    rows: Sequence[Mapping[str, Any]],
    *,
    settings: ClassifierSettings | None = None,
    logger: DiagnosticLogger | None = None,
) -> DatasetSchema:
    """
    Profile ``rows`` with a fresh :class:`SchemaProfiler`.
    """

    return SchemaProfiler(settings=settings, logger=logger).analyze(rows)
