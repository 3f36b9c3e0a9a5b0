"""
chart_insights/domain/models.py

Result models returned by the classifier, profiler and validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chart_insights.domain.vocabulary import ColumnRole, ColumnType


@dataclass(frozen=True)
class ColumnClassification:
    """
    Type and date verdict for one column's values.
    """

    type: str
    is_date: bool
    date_confidence: int
    date_format: str | None = None

    @classmethod
    def unknown(cls) -> "ColumnClassification":
        return cls(type=ColumnType.UNKNOWN, is_date=False, date_confidence=0)


@dataclass(frozen=True)
class DateConfidence:
    """
    Confidence-scored date detection outcome.
    """

    is_date: bool
    confidence: int
    format: str | None = None


@dataclass(frozen=True)
class NumericStats:
    """
    Summary statistics for a numeric column.
    """

    min: float
    max: float
    mean: float
    median: float
    std: float


@dataclass(frozen=True)
class ColumnProfile:
    """
    Profiled column metadata consumed by chart recommendation.
    """

    name: str
    type: str
    role: str = ColumnRole.UNKNOWN
    is_date: bool = False
    date_confidence: int = 0
    date_format: str | None = None
    detection_reason: str = ""
    unique_count: int = 0
    null_count: int = 0
    null_percentage: float = 0.0
    sample_values: tuple[Any, ...] = ()
    stats: NumericStats | None = None
    suggested_usage: tuple[str, ...] = ()


@dataclass(frozen=True)
class ColumnRelationship:
    """
    A column that appears to reference an identifier column.
    """

    from_column: str
    to_column: str
    kind: str = "one-to-many"


@dataclass(frozen=True)
class DatasetSchema:
    """
    Profiled dataset: column profiles in declaration order.
    """

    row_count: int
    column_count: int
    columns: tuple[ColumnProfile, ...] = field(default_factory=tuple)
    relationships: tuple[ColumnRelationship, ...] = field(default_factory=tuple)

    def column(self, name: str) -> ColumnProfile | None:
        for profile in self.columns:
            if profile.name == name:
                return profile
        return None

    def columns_with_role(self, role: str) -> list[str]:
        return [profile.name for profile in self.columns if profile.role == role]


@dataclass(frozen=True)
class ValidationResult:
    """
    Verdict for one chart type + data mapping against a row set.

    ``code`` is one of the constants in :mod:`chart_insights.failure_codes`
    when ``is_valid`` is False.
    """

    is_valid: bool
    reason: str | None = None
    suggestions: tuple[str, ...] = ()
    code: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, code: str, reason: str, *suggestions: str) -> "ValidationResult":
        return cls(is_valid=False, reason=reason, suggestions=tuple(suggestions), code=code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"isValid": self.is_valid}
        if self.reason is not None:
            payload["reason"] = self.reason
        if self.suggestions:
            payload["suggestions"] = list(self.suggestions)
        if self.code is not None:
            payload["code"] = self.code
        return payload
