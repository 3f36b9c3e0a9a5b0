"""Shared failure code constants for chart mapping validation."""

UNSUPPORTED_CHART_TYPE = "unsupported_chart_type"
INVALID_MAPPING = "invalid_mapping"
NO_DATA = "no_data"
REQUIRED_SLOT_MISSING = "required_slot_missing"
MISSING_FIELDS = "missing_fields"
EMPTY_FIELDS = "empty_fields"

NO_NUMERIC_VALUES = "no_numeric_values"
ALL_ZERO = "all_zero"
NO_VARIATION = "no_variation"
MOSTLY_ZERO = "mostly_zero"
TOO_FEW_POINTS = "too_few_points"
SINGLE_POINT = "single_point"
SINGLE_CATEGORY = "single_category"
TOO_FEW_COLUMNS = "too_few_columns"

STRUCTURAL_FAILURES = [
    UNSUPPORTED_CHART_TYPE,
    INVALID_MAPPING,
    REQUIRED_SLOT_MISSING,
]

DATA_FAILURES = [
    NO_DATA,
    MISSING_FIELDS,
    EMPTY_FIELDS,
    NO_NUMERIC_VALUES,
    ALL_ZERO,
    NO_VARIATION,
    MOSTLY_ZERO,
    TOO_FEW_POINTS,
    SINGLE_POINT,
    SINGLE_CATEGORY,
    TOO_FEW_COLUMNS,
]
