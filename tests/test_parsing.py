"""
tests/test_parsing.py

Pytest unit tests for the shared numeric and date parsers.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from chart_insights.domain.cells import BoolCell, NullCell, NumberCell, TextCell, cell_text, is_blank, to_cell
from chart_insights.parsing.dates import (
    column_name_suggests_date,
    is_valid_date,
    looks_like_date,
    match_date_pattern,
    parse_date_value,
)
from chart_insights.parsing.numeric import parse_numeric_value


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------


class TestCells:
    def test_bool_is_never_a_number(self) -> None:
        assert to_cell(True) == BoolCell(True)
        assert to_cell(1) == NumberCell(1)

    def test_nan_is_null(self) -> None:
        assert isinstance(to_cell(float("nan")), NullCell)

    def test_other_objects_become_text(self) -> None:
        assert to_cell(["a"]) == TextCell("['a']")

    def test_blank_text(self) -> None:
        assert is_blank(to_cell("   "))
        assert not is_blank(to_cell(0))

    def test_cell_text_prints_integral_floats_as_ints(self) -> None:
        assert cell_text(to_cell(3.0)) == "3"
        assert cell_text(to_cell(2.5)) == "2.5"


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestParseNumericValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (42, 42),
            (3.5, 3.5),
            ("1,200.50", 1200.5),
            ("$1,200", 1200.0),
            ("€99", 99.0),
            ("45%", 45.0),
            ("(300)", -300.0),
            (" -7 ", -7.0),
        ],
    )
    def test_parses_formatted_numbers(self, raw: object, expected: float) -> None:
        assert parse_numeric_value(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "12abc", True, False, float("inf"), 1e16, "2e16"])
    def test_rejects_non_numbers(self, raw: object) -> None:
        assert parse_numeric_value(raw) is None

    def test_dates_are_not_numbers(self) -> None:
        assert parse_numeric_value(date(2024, 1, 1)) is None


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


class TestIsValidDate:
    @pytest.mark.parametrize(
        "raw",
        ["2024-01-15", "01/15/2024", "Jan 5, 2024", "2024", "Q1 2024", date(2024, 1, 1)],
    )
    def test_accepts_dates(self, raw: object) -> None:
        assert is_valid_date(raw) is True

    @pytest.mark.parametrize(
        "raw",
        ["1200", "12345", "1850-06-01", "hello", "", None, 20240115, True],
    )
    def test_rejects_non_dates(self, raw: object) -> None:
        assert is_valid_date(raw) is False


class TestParseDateValue:
    def test_iso_with_zulu_is_normalized_to_naive_utc(self) -> None:
        assert parse_date_value("2024-03-05T10:00:00Z") == datetime(2024, 3, 5, 10, 0)

    def test_aware_datetime_is_converted_to_utc(self) -> None:
        aware = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)
        assert parse_date_value(aware) == datetime(2024, 3, 5, 12, 0)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Q2 2024", datetime(2024, 4, 1)),
            ("2024 Q3", datetime(2024, 7, 1)),
            ("2024-Q4", datetime(2024, 10, 1)),
            ("Jan 2024", datetime(2024, 1, 1)),
            ("Mar 5, 2024", datetime(2024, 3, 5)),
            ("2024", datetime(2024, 1, 1)),
            (date(2024, 2, 29), datetime(2024, 2, 29)),
        ],
    )
    def test_parses_labels(self, raw: object, expected: datetime) -> None:
        assert parse_date_value(raw) == expected

    def test_missing_day_never_uses_today(self) -> None:
        assert parse_date_value("March 2023") == datetime(2023, 3, 1)

    @pytest.mark.parametrize("raw", [None, True, "", "not a date", "123456"])
    def test_unparseable_values(self, raw: object) -> None:
        assert parse_date_value(raw) is None

    @pytest.mark.parametrize("raw", ["Mon", "Tuesday", "March", "1st", "3.5M", "6M", "14:30"])
    def test_text_without_year_and_month_is_not_a_date(self, raw: str) -> None:
        assert parse_date_value(raw) is None
        assert is_valid_date(raw) is False
        assert looks_like_date(raw) is False


class TestPatternsAndNames:
    @pytest.mark.parametrize(
        ("text", "name"),
        [
            ("2024-01-15", "iso_date"),
            ("2024-01-15T08:30:00", "iso_datetime"),
            ("1/5/2024", "us_slash"),
            ("05.01.2024", "eu_dot"),
            ("Jan 5, 2024", "month_day_year"),
            ("5 Jan 2024", "day_month_year"),
            ("09-Sep-25", "day_mon_year_dash"),
            ("Q1 2024", "quarter_year"),
            ("2024 Q1", "year_quarter"),
            ("Jan 2024", "month_year"),
            ("2024-01", "year_month"),
            ("2024", "year"),
            ("9:45 PM", "time"),
        ],
    )
    def test_match_date_pattern(self, text: str, name: str) -> None:
        assert match_date_pattern(text) == name

    def test_out_of_range_year_is_not_a_pattern(self) -> None:
        assert match_date_pattern("1001") is None

    @pytest.mark.parametrize("name", ["order_date", "CreatedAt", "fiscal_quarter", "DueBy"])
    def test_date_like_names(self, name: str) -> None:
        assert column_name_suggests_date(name)

    @pytest.mark.parametrize("name", ["revenue", "region", "customer_id"])
    def test_other_names(self, name: str) -> None:
        assert not column_name_suggests_date(name)


class TestLooksLikeDate:
    @pytest.mark.parametrize("raw", ["2024-01-15", "15/01/2024", "2024", "March 3, 2024", date(2024, 1, 1)])
    def test_date_like(self, raw: object) -> None:
        assert looks_like_date(raw)

    @pytest.mark.parametrize("raw", [None, "", 0, "12345", "3.14", "East", 12345])
    def test_not_date_like(self, raw: object) -> None:
        assert not looks_like_date(raw)
