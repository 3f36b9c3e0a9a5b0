"""
chart_insights/validators/field_rules.py

Which column types may be dropped onto which chart slot.

Rules are permissive by default; only gauge, bullet and scorecard value
slots insist on numeric columns.
"""

from __future__ import annotations

from chart_insights.domain.vocabulary import ChartType, ColumnType

NUMERIC_ONLY_SLOTS: dict[str, frozenset[str]] = {
    ChartType.GAUGE: frozenset({"value", "metric"}),
    ChartType.BULLET: frozenset({"actual", "comparative", "target"}),
    ChartType.SCORECARD: frozenset({"metric", "value"}),
}

Y_AXIS_SLOTS = frozenset({"yAxis", "yAxis1", "yAxis2"})

_TYPE_ALIASES: dict[str, str] = {
    "number": ColumnType.NUMBER,
    "numeric": ColumnType.NUMBER,
    "integer": ColumnType.NUMBER,
    "int": ColumnType.NUMBER,
    "float": ColumnType.NUMBER,
    "decimal": ColumnType.NUMBER,
    "date": ColumnType.DATE,
    "datetime": ColumnType.DATE,
    "timestamp": ColumnType.DATE,
    "boolean": ColumnType.BOOLEAN,
    "bool": ColumnType.BOOLEAN,
    "categorical": ColumnType.CATEGORICAL,
    "category": ColumnType.CATEGORICAL,
}


def normalize_field_type(field_type: str) -> str:
    """
    Map loose type names (``integer``, ``datetime``, ``bool``...) onto column types.

    Anything unrecognised is treated as free text.
    """

    return _TYPE_ALIASES.get(field_type.strip().lower(), ColumnType.STRING)


def is_field_allowed_for_chart(chart_type: str, slot: str, field_type: str) -> bool:
    """
    Return True when a column of ``field_type`` may fill ``slot`` on ``chart_type``.
    """

    numeric_slots = NUMERIC_ONLY_SLOTS.get(chart_type)
    if numeric_slots is not None and slot in numeric_slots:
        return normalize_field_type(field_type) == ColumnType.NUMBER
    return True


def get_field_type_help_text(chart_type: str, slot: str) -> str:
    """
    Short hint shown next to a slot while a mapping is being built.
    """

    if chart_type == ChartType.GAUGE and slot in NUMERIC_ONLY_SLOTS[ChartType.GAUGE]:
        return "Numeric fields required for gauge values"
    if chart_type == ChartType.BULLET and slot in NUMERIC_ONLY_SLOTS[ChartType.BULLET]:
        return "Numeric fields required for bullet chart metrics"
    if chart_type == ChartType.SCORECARD and slot in NUMERIC_ONLY_SLOTS[ChartType.SCORECARD]:
        return "Numeric fields required for scorecard values"

    if slot in Y_AXIS_SLOTS:
        if chart_type in (ChartType.BAR, ChartType.COMBO):
            return "Any field works: numeric for values, text for categories"
        if chart_type in (ChartType.LINE, ChartType.AREA, ChartType.SPARKLINE):
            return "Works best with numeric fields, but categorical is supported"
        return "Any field can be used"

    if slot in ("xAxis", "category"):
        return "Any field can be used for grouping or categories"

    if slot == "value":
        if chart_type in (ChartType.PIE, ChartType.TREEMAP):
            return "Optional: numeric for values, or leave empty to count occurrences"
        return "Numeric fields recommended for values"

    return "Any field can be used"
