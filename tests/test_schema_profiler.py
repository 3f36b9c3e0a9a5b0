"""
tests/test_schema_profiler.py

Pytest unit tests for role assignment and dataset schema profiling.
"""

from __future__ import annotations

import math

import pytest

from chart_insights.domain.models import ColumnRelationship
from chart_insights.domain.vocabulary import ColumnRole, ColumnType
from chart_insights.mappers.role_mapper import assign_role, name_suggests_identifier, normalize_header
from chart_insights.mappers.schema_profiler import SchemaProfiler, analyze_schema
from chart_insights.mappers.usage_hints import detect_relationships, suggest_usage


@pytest.fixture()
def rows() -> list[dict[str, object]]:
    return [
        {"order_id": 1, "order_date": "2024-01-05", "shipped": "2024-01-07", "region": "East", "month": 1, "sales": 10},
        {"order_id": 2, "order_date": "2024-01-06", "shipped": "2024-01-09", "region": "West", "month": 1, "sales": 20},
        {"order_id": 3, "order_date": "2024-02-11", "shipped": "2024-02-12", "region": "East", "month": 2, "sales": 30},
        {"order_id": 4, "order_date": "2024-03-15", "shipped": "2024-03-18", "region": "East", "month": 3, "sales": 40},
        {"order_id": 5, "order_date": "2024-03-20", "shipped": "2024-03-22", "region": "West", "month": 3, "sales": None},
    ]


# ---------------------------------------------------------------------------
# Role assignment
# ---------------------------------------------------------------------------


class TestAssignRole:
    @pytest.mark.parametrize(
        ("name", "column_type", "expected"),
        [
            ("anything", ColumnType.UNKNOWN, ColumnRole.UNKNOWN),
            ("customer_id", ColumnType.NUMBER, ColumnRole.IDENTIFIER),
            ("orderId", ColumnType.STRING, ColumnRole.IDENTIFIER),
            ("SKU", ColumnType.CATEGORICAL, ColumnRole.IDENTIFIER),
            ("created", ColumnType.DATE, ColumnRole.TIMESTAMP),
            ("Year", ColumnType.NUMBER, ColumnRole.TIMESTAMP),
            ("revenue", ColumnType.NUMBER, ColumnRole.METRIC),
            ("region", ColumnType.CATEGORICAL, ColumnRole.DIMENSION),
            ("is_active", ColumnType.BOOLEAN, ColumnRole.DIMENSION),
            ("country_code", ColumnType.CATEGORICAL, ColumnRole.DIMENSION),
        ],
    )
    def test_rules(self, name: str, column_type: str, expected: str) -> None:
        assert assign_role(name, column_type) == expected

    def test_all_distinct_free_text_is_identifier_above_twenty_rows(self) -> None:
        assert assign_role("reference", ColumnType.STRING, unique_count=21, non_null_count=21) == ColumnRole.IDENTIFIER
        assert assign_role("reference", ColumnType.STRING, unique_count=20, non_null_count=20) == ColumnRole.DIMENSION
        assert assign_role("reference", ColumnType.STRING, unique_count=20, non_null_count=25) == ColumnRole.DIMENSION

    def test_identifier_names(self) -> None:
        assert name_suggests_identifier("id")
        assert name_suggests_identifier("user-uuid")
        assert not name_suggests_identifier("paid")
        assert not name_suggests_identifier("width")

    def test_normalize_header(self) -> None:
        assert normalize_header("  Order Date ") == "orderdate"


# ---------------------------------------------------------------------------
# Schema profiling
# ---------------------------------------------------------------------------


class TestAnalyzeSchema:
    def test_dataset_counts(self, rows: list[dict[str, object]]) -> None:
        schema = analyze_schema(rows)
        assert schema.row_count == 5
        assert schema.column_count == 6
        assert [column.name for column in schema.columns] == [
            "order_id",
            "order_date",
            "shipped",
            "region",
            "month",
            "sales",
        ]

    def test_types_and_roles(self, rows: list[dict[str, object]]) -> None:
        schema = analyze_schema(rows)
        observed = {column.name: (column.type, column.role) for column in schema.columns}
        assert observed == {
            "order_id": (ColumnType.NUMBER, ColumnRole.IDENTIFIER),
            "order_date": (ColumnType.DATE, ColumnRole.TIMESTAMP),
            "shipped": (ColumnType.DATE, ColumnRole.TIMESTAMP),
            "region": (ColumnType.CATEGORICAL, ColumnRole.DIMENSION),
            "month": (ColumnType.NUMBER, ColumnRole.TIMESTAMP),
            "sales": (ColumnType.NUMBER, ColumnRole.METRIC),
        }
        assert schema.columns_with_role(ColumnRole.METRIC) == ["sales"]

    def test_name_boost_and_detection_reason(self, rows: list[dict[str, object]]) -> None:
        schema = analyze_schema(rows)
        order_date = schema.column("order_date")
        shipped = schema.column("shipped")
        month = schema.column("month")
        assert order_date is not None and shipped is not None and month is not None

        assert order_date.date_confidence == 100
        assert order_date.detection_reason == "Column name and pattern match"
        assert order_date.date_format == "iso_date"
        assert shipped.date_confidence == 100
        assert shipped.detection_reason == "Pattern match"
        assert month.date_confidence == 0
        assert month.detection_reason == ""
        assert month.is_date is False

    def test_boost_never_changes_type(self) -> None:
        data = [{"due": value} for value in ("2024-01-01", "x", "y", "n/a", "tbd")]
        profile = analyze_schema(data).columns[0]
        # 1/5 matched: raw confidence 10, below the boost floor
        assert profile.date_confidence == 10
        assert profile.type != ColumnType.DATE

        data = [{"due": value} for value in ("2024-01-01", "2024-01-02", "x", "y")]
        profile = analyze_schema(data).columns[0]
        # 2/4 matched: raw confidence 70 is already a date, boosted to 90
        assert profile.date_confidence == 90
        assert profile.type == ColumnType.DATE

    def test_counts_samples_and_stats(self, rows: list[dict[str, object]]) -> None:
        schema = analyze_schema(rows)
        region = schema.column("region")
        sales = schema.column("sales")
        assert region is not None and sales is not None

        assert region.unique_count == 2
        assert region.sample_values == ("East", "West")
        assert region.stats is None

        assert sales.null_count == 1
        assert sales.null_percentage == 20.0
        assert sales.sample_values == (10, 20, 30, 40)
        assert sales.stats is not None
        assert sales.stats.min == 10.0
        assert sales.stats.max == 40.0
        assert sales.stats.mean == 25.0
        assert sales.stats.median == 25.0
        assert math.isclose(sales.stats.std, math.sqrt(125.0))

    def test_sample_values_are_capped_at_five(self) -> None:
        data = [{"n": index} for index in range(10)]
        profile = analyze_schema(data).columns[0]
        assert profile.sample_values == (0, 1, 2, 3, 4)

    def test_empty_rows(self) -> None:
        schema = analyze_schema([])
        assert schema.row_count == 0
        assert schema.columns == ()

    def test_all_null_column_is_unknown(self) -> None:
        schema = SchemaProfiler().analyze([{"blank": None}, {"blank": ""}])
        profile = schema.columns[0]
        assert profile.type == ColumnType.UNKNOWN
        assert profile.role == ColumnRole.UNKNOWN
        assert profile.null_count == 2
        assert profile.null_percentage == 100.0

    def test_profiler_logs_through_injected_logger(self, rows: list[dict[str, object]]) -> None:
        events: list[tuple[str, dict[str, object]]] = []

        class Recorder:
            def log(self, event: str, **fields: object) -> None:
                events.append((event, fields))

            def warn(self, event: str, **fields: object) -> None:
                events.append((event, fields))

            def error(self, event: str, **fields: object) -> None:
                events.append((event, fields))

        analyze_schema(rows, logger=Recorder())
        assert events[0][0] == "schema_profiled"
        assert events[0][1]["column_count"] == 6


# ---------------------------------------------------------------------------
# Usage hints and relationships
# ---------------------------------------------------------------------------


class TestUsageHints:
    def test_rate_metric(self) -> None:
        assert suggest_usage("click_rate", ColumnType.NUMBER, unique_count=3, non_null_count=6) == (
            "measure",
            "y-axis",
            "percentage",
            "kpi",
            "aggregation",
            "comparison",
            "trend-analysis",
            "line-chart",
            "gauge-chart",
            "low-cardinality",
            "binary-or-limited",
            "pie-chart",
        )

    def test_geographic_category(self) -> None:
        assert suggest_usage("region", ColumnType.CATEGORICAL, unique_count=2, non_null_count=5) == (
            "dimension",
            "geographic",
            "grouping",
            "filtering",
            "x-axis",
            "pie-chart",
            "donut-chart",
            "bar-chart",
            "column-chart",
            "low-cardinality",
            "binary-or-limited",
        )

    def test_high_cardinality_text(self) -> None:
        usage = suggest_usage("comment", ColumnType.STRING, unique_count=9, non_null_count=10)
        assert usage == ("identifier", "high-cardinality", "potential-identifier")

    def test_empty_column_has_no_hints(self) -> None:
        assert suggest_usage("blank", ColumnType.UNKNOWN, unique_count=0, non_null_count=0) == ()

    def test_profiles_carry_hints(self, rows: list[dict[str, object]]) -> None:
        schema = analyze_schema(rows)
        order_date = schema.column("order_date")
        order_id = schema.column("order_id")
        assert order_date is not None and order_id is not None
        assert "time-series" in order_date.suggested_usage
        assert "line-chart" in order_date.suggested_usage
        assert order_id.suggested_usage[:2] == ("identifier", "grouping")


class TestRelationships:
    def test_reference_column_shares_identifier_stem(self) -> None:
        data = [
            {"user_id": "u1", "user_name": "ann", "user_score": 1, "plan": "pro"},
            {"user_id": "u2", "user_name": "bob", "user_score": 2, "plan": "free"},
            {"user_id": "u3", "user_name": "cy", "user_score": 3, "plan": "pro"},
        ]
        schema = analyze_schema(data)
        assert schema.relationships == (ColumnRelationship(from_column="user_name", to_column="user_id"),)
        assert detect_relationships(schema.columns) == schema.relationships

    def test_type_mismatch_is_not_a_relationship(self, rows: list[dict[str, object]]) -> None:
        assert analyze_schema(rows).relationships == ()
