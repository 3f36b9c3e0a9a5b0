"""
chart_insights/validators/mapping_validator.py

Validation of a proposed chart (chart type + data mapping) against the rows
it would render.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

from pydantic import ValidationError

from chart_insights import failure_codes
from chart_insights.config import ValidationSettings, get_validation_settings
from chart_insights.domain.cells import NullCell, cell_text, is_blank, to_cell
from chart_insights.domain.models import ValidationResult
from chart_insights.domain.vocabulary import CHART_TYPES, ChartType
from chart_insights.logging_utils import NULL_LOGGER, DiagnosticLogger
from chart_insights.parsing.numeric import parse_numeric_value
from chart_insights.schemas.data_mapping import DataMapping

MappingInput = Union[DataMapping, Mapping[str, Any]]
Rows = Sequence[Mapping[str, Any]]

# Each inner tuple is an any-of group; every group must be satisfied.
REQUIRED_SLOTS: dict[str, tuple[tuple[str, ...], ...]] = {
    ChartType.LINE: (("xAxis", "category"),),
    ChartType.BAR: (("xAxis", "category"),),
    ChartType.AREA: (("xAxis", "category"), ("yAxis", "yAxis1", "values")),
    ChartType.SCATTER: (("xAxis", "category"), ("yAxis", "yAxis1", "values")),
    ChartType.PIE: (("category",),),
    ChartType.SCORECARD: (("metric",),),
    ChartType.GAUGE: (("metric",),),
    ChartType.TABLE: (("columns", "yAxis"),),
    ChartType.COMBO: (("xAxis",), ("yAxis", "yAxis1")),
    ChartType.WATERFALL: (("category",), ("value",)),
    ChartType.TREEMAP: (("category",), ("value",)),
    ChartType.HEATMAP: (("xAxis",), ("yAxis",), ("value",)),
    ChartType.COHORT: (("cohort",), ("period",), ("value",)),
    ChartType.BULLET: (("actual",), ("comparative",)),
    ChartType.SPARKLINE: (("trend",),),
    ChartType.SANKEY: (("source",), ("target_node",), ("value",)),
}

# Slots whose columns carry the plotted magnitudes.
VALUE_SLOTS: tuple[str, ...] = ("yAxis", "yAxis1", "yAxis2", "values", "value")
X_SLOTS: tuple[str, ...] = ("xAxis", "category")
Y_SLOTS: tuple[str, ...] = ("yAxis", "yAxis1", "values")

VARIATION_CHARTS = frozenset({ChartType.LINE, ChartType.BAR, ChartType.AREA, ChartType.SCATTER})
SERIES_CHARTS = frozenset({ChartType.LINE, ChartType.AREA})

MIN_SERIES_ROWS = 2
MIN_SCATTER_POINTS = 3
MIN_TABLE_COLUMNS = 2


@dataclass(frozen=True)
class ChartProposal:
    """
    One recommended chart awaiting validation.
    """

    chart_type: str
    mapping: MappingInput
    title: str | None = None


ProposalInput = Union[ChartProposal, Mapping[str, Any]]


class MappingValidator:
    """
    Decides whether a chart mapping would render something meaningful.

    Checks run in a fixed order and stop at the first failure: chart type,
    mapping shape, empty rows, required slots, missing columns, empty
    columns, then chart-specific data quality.
    """

    def __init__(
        self,
        *,
        settings: ValidationSettings | None = None,
        logger: DiagnosticLogger | None = None,
    ) -> None:
        self._settings = settings or get_validation_settings()
        self._logger = logger or NULL_LOGGER

    def validate(self, chart_type: str, mapping: MappingInput, rows: Rows | None) -> ValidationResult:
        """
        Validate ``mapping`` for ``chart_type`` against ``rows``.
        """

        parsed, failure = self._parse(chart_type, mapping)
        if failure is not None:
            return failure

        if not rows:
            return ValidationResult.fail(
                failure_codes.NO_DATA,
                "No data available",
                "Upload a dataset to see visualizations",
            )

        failure = self._check_required(chart_type, parsed)
        if failure is not None:
            return failure

        referenced = parsed.referenced_columns()
        headers = set(rows[0].keys())
        missing = [name for name in referenced if name not in headers]
        if missing:
            return ValidationResult.fail(
                failure_codes.MISSING_FIELDS,
                f"Missing data fields: {', '.join(missing)}",
                "Check if the data structure matches the chart configuration",
            )

        empty = [name for name in referenced if not _has_any_value(rows, name)]
        if empty:
            return ValidationResult.fail(
                failure_codes.EMPTY_FIELDS,
                f"Selected fields contain no data: {', '.join(empty)}",
                "Choose fields that contain actual values",
            )

        return self._check_chart_data(chart_type, parsed, rows)

    def validate_config(self, chart_type: str, mapping: MappingInput) -> ValidationResult:
        """
        Structural check only: known chart type, well-formed mapping, required slots.
        """

        parsed, failure = self._parse(chart_type, mapping)
        if failure is not None:
            return failure
        return self._check_required(chart_type, parsed) or ValidationResult.ok()

    def filter_valid(self, proposals: Sequence[ProposalInput], rows: Rows | None) -> list[ProposalInput]:
        """
        Keep the proposals that validate against ``rows``, in input order.
        """

        accepted: list[ProposalInput] = []
        for index, proposal in enumerate(proposals):
            chart_type, mapping, title = _unpack_proposal(proposal)
            result = self.validate(chart_type, mapping, rows)
            if result.is_valid:
                accepted.append(proposal)
                continue
            if self._settings.log_rejected_charts:
                self._logger.warn(
                    "chart_rejected",
                    index=index,
                    chart_type=chart_type,
                    title=title,
                    code=result.code,
                    reason=result.reason,
                )

        self._logger.log(
            "chart_validation_complete",
            total=len(proposals),
            valid=len(accepted),
            filtered_out=len(proposals) - len(accepted),
        )
        return accepted

    # ------------------------------------------------------------------
    # Structural checks
    # ------------------------------------------------------------------

    def _parse(
        self,
        chart_type: str,
        mapping: MappingInput,
    ) -> tuple[DataMapping, None] | tuple[None, ValidationResult]:
        if chart_type not in CHART_TYPES:
            return None, ValidationResult.fail(
                failure_codes.UNSUPPORTED_CHART_TYPE,
                f"Unsupported chart type: {chart_type}",
                f"Use one of: {', '.join(sorted(CHART_TYPES))}",
            )
        try:
            return DataMapping.from_payload(mapping), None
        except ValidationError as exc:
            bad_slots = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
            self._logger.warn(
                "invalid_mapping",
                chart_type=chart_type,
                error_count=exc.error_count(),
                slots=bad_slots,
            )
            detail = f" ({', '.join(bad_slots)})" if bad_slots else ""
            return None, ValidationResult.fail(
                failure_codes.INVALID_MAPPING,
                f"Malformed data mapping{detail}",
                "Each slot must reference a column name or a list of column names",
            )

    @staticmethod
    def _check_required(chart_type: str, mapping: DataMapping) -> ValidationResult | None:
        label = _chart_label(chart_type)
        for group in REQUIRED_SLOTS[chart_type]:
            if any(mapping.is_set(slot) for slot in group):
                continue
            wanted = " or ".join(group)
            return ValidationResult.fail(
                failure_codes.REQUIRED_SLOT_MISSING,
                f"{label} chart requires {wanted} field in data mapping",
                f"Assign a column to {wanted}",
            )
        return None

    # ------------------------------------------------------------------
    # Data-quality checks
    # ------------------------------------------------------------------

    def _check_chart_data(self, chart_type: str, mapping: DataMapping, rows: Rows) -> ValidationResult:
        if chart_type in SERIES_CHARTS:
            result = self._check_series(chart_type, mapping, rows)
        elif chart_type == ChartType.BAR:
            result = self._check_variation(mapping.referenced_columns(VALUE_SLOTS), rows, chart_type)
        elif chart_type == ChartType.SCATTER:
            result = self._check_scatter(mapping, rows)
        elif chart_type == ChartType.PIE:
            result = self._check_pie(mapping, rows)
        elif chart_type in (ChartType.SCORECARD, ChartType.GAUGE):
            result = _require_numeric(rows, mapping.columns_for("metric"), chart_type)
        elif chart_type == ChartType.BULLET:
            result = _require_numeric(rows, mapping.columns_for("actual"), chart_type)
        elif chart_type == ChartType.TABLE:
            result = self._check_table(mapping)
        elif chart_type == ChartType.COMBO:
            result = self._check_combo(mapping, rows)
        elif chart_type == ChartType.WATERFALL:
            result = self._check_waterfall(mapping, rows)
        else:
            result = None
        return result or ValidationResult.ok()

    def _check_series(self, chart_type: str, mapping: DataMapping, rows: Rows) -> ValidationResult | None:
        if len(rows) < MIN_SERIES_ROWS:
            return ValidationResult.fail(
                failure_codes.TOO_FEW_POINTS,
                f"{_chart_label(chart_type)} chart needs at least {MIN_SERIES_ROWS} data points",
                "Add more data points for meaningful visualization",
            )

        value_columns = mapping.referenced_columns(VALUE_SLOTS)
        failure = self._check_variation(value_columns, rows, chart_type)
        if failure is not None:
            return failure

        sampled = _numeric_values(rows[: self._settings.sample_size], value_columns)
        if not sampled:
            return None
        nonzero = sum(1 for value in sampled if value != 0)
        if nonzero / len(sampled) < self._settings.min_nonzero_ratio:
            return ValidationResult.fail(
                failure_codes.MOSTLY_ZERO,
                "Values are mostly zeros, insufficient variation",
                "Pick a metric with more non-zero values or a shorter period",
            )
        return None

    @staticmethod
    def _check_variation(columns: list[str], rows: Rows, chart_type: str) -> ValidationResult | None:
        # Line and bar charts may plot counts per category with no value slot.
        if not columns:
            return None

        values = _numeric_values(rows, columns)
        if not values:
            return ValidationResult.fail(
                failure_codes.NO_NUMERIC_VALUES,
                "No numeric values found",
                f"Select numeric fields for {chart_type} chart visualization",
            )

        distinct = set(values)
        if len(distinct) == 1:
            if 0 in distinct:
                return ValidationResult.fail(
                    failure_codes.ALL_ZERO,
                    "All values are zero",
                    "This metric has no data to visualize",
                )
            return ValidationResult.fail(
                failure_codes.NO_VARIATION,
                "All data points have the same value, no variation to show",
                f"{_chart_label(chart_type)} charts are not meaningful when all values are identical",
            )
        return None

    def _check_scatter(self, mapping: DataMapping, rows: Rows) -> ValidationResult | None:
        if len(rows) < MIN_SCATTER_POINTS:
            return ValidationResult.fail(
                failure_codes.TOO_FEW_POINTS,
                f"Scatter plot needs at least {MIN_SCATTER_POINTS} data points",
                "Add more data points for meaningful patterns",
            )

        x_column = mapping.referenced_columns(X_SLOTS)[0]
        y_column = mapping.referenced_columns(Y_SLOTS)[0]
        failure = self._check_variation([x_column, y_column], rows, ChartType.SCATTER)
        if failure is not None:
            return failure

        x_values = _numeric_values(rows, [x_column])
        y_values = _numeric_values(rows, [y_column])
        if len(x_values) < MIN_SCATTER_POINTS or len(y_values) < MIN_SCATTER_POINTS:
            return ValidationResult.fail(
                failure_codes.TOO_FEW_POINTS,
                "Not enough valid numeric values",
                "Scatter plots need numeric data with fewer null values",
            )

        points = set()
        for row in rows:
            x = parse_numeric_value(row.get(x_column))
            y = parse_numeric_value(row.get(y_column))
            if x is not None and y is not None:
                points.add((x, y))
        if len(points) <= 1:
            return ValidationResult.fail(
                failure_codes.SINGLE_POINT,
                "All data points are at the same location",
                "Scatter plots need variation in data to show patterns",
            )
        return None

    @staticmethod
    def _check_pie(mapping: DataMapping, rows: Rows) -> ValidationResult | None:
        category_columns = mapping.columns_for("category")
        category = category_columns[0]
        labels = {
            cell_text(cell)
            for cell in (to_cell(row.get(category)) for row in rows)
            if not is_blank(cell)
        }
        if len(labels) < 2:
            return ValidationResult.fail(
                failure_codes.SINGLE_CATEGORY,
                "All data points have the same category",
                "Pie charts need multiple categories to be meaningful",
            )

        if mapping.is_set("value"):
            value_columns = mapping.columns_for("value")
        else:
            value_columns = [name for name in rows[0].keys() if name not in category_columns]

        if not any(value != 0 for value in _numeric_values(rows, value_columns)):
            return ValidationResult.fail(
                failure_codes.ALL_ZERO,
                "All values are zero or non-numeric",
                "Ensure the value field contains numeric data",
            )
        return None

    @staticmethod
    def _check_table(mapping: DataMapping) -> ValidationResult | None:
        if len(mapping.referenced_columns()) < MIN_TABLE_COLUMNS:
            return ValidationResult.fail(
                failure_codes.TOO_FEW_COLUMNS,
                f"Table needs at least {MIN_TABLE_COLUMNS} columns",
                "Select multiple fields to create a meaningful table",
            )
        return None

    @staticmethod
    def _check_combo(mapping: DataMapping, rows: Rows) -> ValidationResult | None:
        if len(rows) < MIN_SERIES_ROWS:
            return ValidationResult.fail(
                failure_codes.TOO_FEW_POINTS,
                f"Combo chart needs at least {MIN_SERIES_ROWS} data points",
                "Add more data points for meaningful visualization",
            )
        values = _numeric_values(rows, mapping.referenced_columns(VALUE_SLOTS))
        if not values:
            return ValidationResult.fail(
                failure_codes.NO_NUMERIC_VALUES,
                "No numeric values found",
                "Combo charts require numeric data fields",
            )
        if all(value == 0 for value in values):
            return ValidationResult.fail(
                failure_codes.ALL_ZERO,
                "All values are zero",
                "This metric has no data to visualize",
            )
        return None

    @staticmethod
    def _check_waterfall(mapping: DataMapping, rows: Rows) -> ValidationResult | None:
        if len(rows) < MIN_SERIES_ROWS:
            return ValidationResult.fail(
                failure_codes.TOO_FEW_POINTS,
                f"Waterfall chart needs at least {MIN_SERIES_ROWS} data points",
                "Add more sequential steps for waterfall visualization",
            )
        if not _numeric_values(rows, mapping.columns_for("value")):
            return ValidationResult.fail(
                failure_codes.NO_NUMERIC_VALUES,
                "Waterfall chart requires numeric value field",
                "Ensure the value column contains numeric data",
            )
        return None


def _chart_label(chart_type: str) -> str:
    return chart_type.capitalize()


def _has_any_value(rows: Rows, column: str) -> bool:
    """
    Only missing values, NaN and the empty string count as no data; a
    whitespace-only string is a value.
    """
    for row in rows:
        value = row.get(column)
        if isinstance(value, str):
            if value != "":
                return True
        elif not isinstance(to_cell(value), NullCell):
            return True
    return False


def _numeric_values(rows: Rows, columns: Sequence[str]) -> list[float]:
    values: list[float] = []
    for column in columns:
        for row in rows:
            value = parse_numeric_value(row.get(column))
            if value is not None:
                values.append(value)
    return values


def _require_numeric(rows: Rows, columns: list[str], chart_type: str) -> ValidationResult | None:
    if _numeric_values(rows, columns):
        return None
    return ValidationResult.fail(
        failure_codes.NO_NUMERIC_VALUES,
        f"{_chart_label(chart_type)} requires numeric values",
        f"Select a field with numeric data for the {chart_type}",
    )


def _unpack_proposal(proposal: ProposalInput) -> tuple[str, MappingInput, str | None]:
    if isinstance(proposal, ChartProposal):
        return proposal.chart_type, proposal.mapping, proposal.title
    return (
        str(proposal.get("type", "")),
        proposal.get("dataMapping") or {},
        proposal.get("title"),
    )


def validate_mapping(
    chart_type: str,
    mapping: MappingInput,
    rows: Rows | None,
    *,
    settings: ValidationSettings | None = None,
    logger: DiagnosticLogger | None = None,
) -> ValidationResult:
    """
    Validate one chart mapping against ``rows``; never raises.
    """

    return MappingValidator(settings=settings, logger=logger).validate(chart_type, mapping, rows)


def validate_chart_config(
    chart_type: str,
    mapping: MappingInput,
    *,
    logger: DiagnosticLogger | None = None,
) -> ValidationResult:
    """
    Structural validation without looking at any rows.
    """

    return MappingValidator(logger=logger).validate_config(chart_type, mapping)


def filter_valid_charts(
    proposals: Sequence[ProposalInput],
    rows: Rows | None,
    *,
    settings: ValidationSettings | None = None,
    logger: DiagnosticLogger | None = None,
) -> list[ProposalInput]:
    """
    Drop proposals that would render an empty or meaningless chart.
    """

    return MappingValidator(settings=settings, logger=logger).filter_valid(proposals, rows)
