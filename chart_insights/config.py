"""
chart_insights/config.py

Environment-driven settings for classification and validation.

Callers configure the library through ``CHART_INSIGHTS_*`` process
environment variables or by passing settings objects explicitly; no
``.env`` files are read. Malformed values fall back to the default and
numeric values are clamped into their valid range.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

ENV_PREFIX = "CHART_INSIGHTS_"
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_flag(key: str, default: bool) -> bool:
    raw_value = os.getenv(ENV_PREFIX + key)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in _TRUE_VALUES


def _env_count(key: str, default: int, *, lower: int, upper: int | None = None) -> int:
    """
    Integer setting clamped to [lower, upper].
    """

    try:
        value = int(os.getenv(ENV_PREFIX + key, default))
    except ValueError:
        value = default
    value = max(lower, value)
    return value if upper is None else min(upper, value)


def _env_fraction(key: str, default: float) -> float:
    """
    Ratio setting clamped to [0, 1].
    """

    try:
        value = float(os.getenv(ENV_PREFIX + key, default))
    except ValueError:
        value = default
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class ClassifierSettings:
    """
    Thresholds for column type and date classification.
    """

    date_sample_size: int = 10
    date_column_threshold: float = 0.8
    date_confidence_threshold: int = 60
    categorical_ratio: float = 0.5


@dataclass(frozen=True)
class ValidationSettings:
    """
    Thresholds for chart mapping validation.
    """

    sample_size: int = 1000
    min_nonzero_ratio: float = 0.1
    log_rejected_charts: bool = True


@lru_cache(maxsize=1)
def get_classifier_settings() -> ClassifierSettings:
    """
    Return cached classifier settings from environment variables.
    """

    return ClassifierSettings(
        date_sample_size=_env_count("DATE_SAMPLE_SIZE", 10, lower=1),
        date_column_threshold=_env_fraction("DATE_COLUMN_THRESHOLD", 0.8),
        date_confidence_threshold=_env_count("DATE_CONFIDENCE_THRESHOLD", 60, lower=0, upper=100),
        categorical_ratio=_env_fraction("CATEGORICAL_RATIO", 0.5),
    )


@lru_cache(maxsize=1)
def get_validation_settings() -> ValidationSettings:
    """
    Return cached validation settings from environment variables.
    """

    return ValidationSettings(
        sample_size=_env_count("VALIDATION_SAMPLE_SIZE", 1000, lower=1),
        min_nonzero_ratio=_env_fraction("MIN_NONZERO_RATIO", 0.1),
        log_rejected_charts=_env_flag("LOG_REJECTED_CHARTS", True),
    )
