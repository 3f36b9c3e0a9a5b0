"""
tests/test_date_detector.py

Pytest unit tests for the boolean and confidence-scored date detectors.

Coverage
--------
- Confidence tiers for pattern-matched, generically parsed and free text
- Four-digit identifier columns are never dates
- Sampling and threshold behaviour of is_date_column
- Column ordering and name preference in get_best_date_column
- Agreement between the two tiers at the 80% match point
"""

from __future__ import annotations

from datetime import date

import pytest

from chart_insights.classifiers.date_detector import (
    detect_date_columns,
    detect_date_with_confidence,
    get_best_date_column,
    is_date_column,
)
from chart_insights.config import ClassifierSettings


@pytest.fixture()
def rows() -> list[dict[str, object]]:
    return [
        {"order_id": "1001", "created": "2024-01-05", "region": "East", "shipped": "2024-01-07", "sales": 10},
        {"order_id": "1002", "created": "2024-01-06", "region": "West", "shipped": "2024-01-09", "sales": 20},
        {"order_id": "1003", "created": "2024-02-11", "region": "East", "shipped": "2024-02-12", "sales": 30},
        {"order_id": "1004", "created": "2024-03-15", "region": "North", "shipped": "2024-03-18", "sales": 40},
    ]


class TestDetectDateWithConfidence:
    def test_iso_dates_score_at_least_ninety(self) -> None:
        result = detect_date_with_confidence(["2023-01-01", "2023-02-01", "2023-03-01"])
        assert result.is_date is True
        assert result.confidence >= 90
        assert result.format == "iso_date"

    def test_free_text_is_not_a_date(self) -> None:
        result = detect_date_with_confidence(["Campaign A", "Campaign B", "Campaign C"])
        assert result.is_date is False
        assert result.confidence <= 50

    def test_day_month_abbreviation_two_digit_year(self) -> None:
        result = detect_date_with_confidence(["09-Sep-25", "10-Sep-25", "11-Sep-25"])
        assert result.is_date is True
        assert result.confidence >= 60

    def test_four_digit_ids_are_not_dates(self) -> None:
        result = detect_date_with_confidence(["1001", "1002", "1003", "1004"])
        assert result.is_date is False
        assert result.confidence == 0

    def test_plausible_years_are_dates(self) -> None:
        result = detect_date_with_confidence(["2019", "2020", "2021"])
        assert result.is_date is True
        assert result.format == "year"

    def test_numbers_and_booleans_count_only_in_denominator(self) -> None:
        result = detect_date_with_confidence(["2024-01-01", 5, True, "12345"])
        # one match out of four values: 0.25 * 50 rounds half up
        assert result.confidence == 13
        assert result.is_date is False

    def test_date_objects_match(self) -> None:
        result = detect_date_with_confidence([date(2024, 1, 1), date(2024, 2, 1)])
        assert result.confidence == 100
        assert result.format == "date_object"

    def test_blank_values_are_ignored(self) -> None:
        result = detect_date_with_confidence([None, "", "2024-01-01", "2024-01-02"])
        assert result.confidence == 100

    @pytest.mark.parametrize(
        "values",
        [
            ["Mon", "Tue", "Wed", "Thu", "Fri"],
            ["January", "February", "March"],
            ["1st", "2nd", "3rd"],
            ["3M", "6M", "12M"],
            ["3.5M", "1.2M", "0.8M"],
        ],
    )
    def test_values_without_a_calendar_date_score_zero(self, values: list[str]) -> None:
        result = detect_date_with_confidence(values)
        assert result.is_date is False
        assert result.confidence == 0

    def test_empty_input(self) -> None:
        result = detect_date_with_confidence([])
        assert result.is_date is False
        assert result.confidence == 0
        assert result.format is None

    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            # 4/5 matched -> 90
            (["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "x"], 90),
            # 3/5 matched -> 70 + 0.1 * 40
            (["2024-01-01", "2024-01-02", "2024-01-03", "x", "y"], 74),
            # 1/2 matched -> 70
            (["2024-01-01", "x"], 70),
        ],
    )
    def test_piecewise_score(self, values: list[str], expected: int) -> None:
        assert detect_date_with_confidence(values).confidence == expected

    def test_custom_threshold(self) -> None:
        settings = ClassifierSettings(date_confidence_threshold=95)
        result = detect_date_with_confidence(
            ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "x"],
            settings=settings,
        )
        assert result.confidence == 90
        assert result.is_date is False


class TestIsDateColumn:
    def test_detects_iso_column(self, rows: list[dict[str, object]]) -> None:
        assert is_date_column(rows, "created") is True

    def test_identifier_column_is_not_a_date(self, rows: list[dict[str, object]]) -> None:
        assert is_date_column(rows, "order_id") is False

    def test_numeric_column_is_not_a_date(self, rows: list[dict[str, object]]) -> None:
        assert is_date_column(rows, "sales") is False

    def test_threshold_is_eighty_percent(self) -> None:
        data = [{"d": "2024-01-0%d" % day} for day in range(1, 9)] + [{"d": "n/a"}, {"d": "tbd"}]
        assert is_date_column(data, "d") is True
        data[0] = {"d": "unknown"}
        assert is_date_column(data, "d") is False

    def test_none_values_are_skipped_when_sampling(self) -> None:
        data = [{"d": None}, {"d": "2024-01-01"}, {"d": None}, {"d": "2024-01-02"}]
        assert is_date_column(data, "d", sample_size=2) is True

    def test_only_leading_rows_are_sampled(self) -> None:
        data = [{"d": "x"}] * 4 + [{"d": "2024-01-01"}] * 20
        assert is_date_column(data, "d", sample_size=2) is False

    def test_empty_inputs(self) -> None:
        assert is_date_column([], "d") is False
        assert is_date_column([{"d": None}], "d") is False
        assert is_date_column([{"d": "2024-01-01"}], "d", sample_size=0) is False


class TestDetectDateColumns:
    def test_declaration_order(self, rows: list[dict[str, object]]) -> None:
        assert detect_date_columns(rows) == ["created", "shipped"]

    def test_empty_rows(self) -> None:
        assert detect_date_columns([]) == []


class TestGetBestDateColumn:
    def test_prefers_name_containing_date(self) -> None:
        data = [
            {"created_at": "2024-01-01", "order_date": "2024-01-02"},
            {"created_at": "2024-01-03", "order_date": "2024-01-04"},
        ]
        assert get_best_date_column(data) == "order_date"

    def test_first_named_column_without_date_keyword(self, rows: list[dict[str, object]]) -> None:
        assert get_best_date_column(rows) == "created"

    def test_falls_back_to_content_detection(self) -> None:
        data = [{"label": "A", "when_it_happened": "2024-01-01"}]
        assert get_best_date_column(data) == "when_it_happened"

    def test_identifier_columns_are_never_chosen(self) -> None:
        data = [{"order_id": "1001", "amount": 5}, {"order_id": "1002", "amount": 7}]
        assert get_best_date_column(data) is None

    def test_plausible_year_values_are_dates_whatever_the_name(self) -> None:
        # Content decides: values inside 1900-2100 read as years even under "id".
        data = [{"id": str(year), "amount": 5} for year in range(1990, 1995)]
        assert is_date_column(data, "id") is True
        assert get_best_date_column(data) == "id"

    def test_empty_rows(self) -> None:
        assert get_best_date_column([]) is None


def test_tiers_agree_at_eighty_percent_match() -> None:
    values = ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "n/a"]
    data = [{"d": value} for value in values]
    assert is_date_column(data, "d") is True
    result = detect_date_with_confidence(values)
    assert result.is_date is True
    assert result.confidence >= 90
