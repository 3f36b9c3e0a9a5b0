"""
chart_insights/parsing/dates.py

Date parsing primitives shared by the date classifier and the aggregator.

Two deliberately different heuristics live here:

* :func:`is_valid_date` backs the strict column detectors (string or date
  object, parseable, year within 1900-2100).
* :func:`looks_like_date` is the weaker single-value check used to pick a
  date column before time-bucket aggregation.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Any

from dateutil import parser as date_parser

from chart_insights.domain.cells import (
    BoolCell,
    CellValue,
    DateLikeCell,
    NullCell,
    NumberCell,
    TextCell,
    cell_text,
    to_cell,
)

MIN_YEAR = 1900
MAX_YEAR = 2100

# Missing components (day, month, year) are filled from this fixed date so
# parsing never depends on the current clock.
PARSE_DEFAULT = datetime(2000, 1, 1)
_ALTERNATE_DEFAULT = datetime(2001, 2, 2)

_MONTHS = r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"

DATE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("iso_date", re.compile(r"^\d{4}-\d{2}-\d{2}$")),
    ("iso_datetime", re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}")),
    ("us_slash", re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")),
    ("us_dash", re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$")),
    ("eu_dot", re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$")),
    ("month_day_year", re.compile(rf"^{_MONTHS}\s+\d{{1,2}},?\s+\d{{4}}$", re.IGNORECASE)),
    ("day_month_year", re.compile(rf"^\d{{1,2}}\s+{_MONTHS}\s+\d{{4}}$", re.IGNORECASE)),
    ("day_mon_year_dash", re.compile(rf"^\d{{1,2}}-{_MONTHS}-\d{{2,4}}$", re.IGNORECASE)),
    ("day_mon_year_slash", re.compile(rf"^\d{{1,2}}/{_MONTHS}/\d{{2,4}}$", re.IGNORECASE)),
    ("quarter_year", re.compile(r"^Q[1-4]\s+\d{4}$", re.IGNORECASE)),
    ("year_quarter", re.compile(r"^\d{4}\s+Q[1-4]$", re.IGNORECASE)),
    ("month_year", re.compile(rf"^{_MONTHS}\s+\d{{4}}$", re.IGNORECASE)),
    ("year_month", re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")),
    ("year", re.compile(r"^\d{4}$")),
    ("time", re.compile(r"^\d{1,2}:\d{2}(:\d{2})?\s*(AM|PM)?$", re.IGNORECASE)),
)

DATE_NAME_KEYWORDS: tuple[str, ...] = (
    "date",
    "time",
    "timestamp",
    "created",
    "updated",
    "modified",
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "second",
    "start",
    "end",
    "begin",
    "finish",
    "period",
    "quarter",
    "week",
    "dob",
    "birthday",
    "anniversary",
    "expiry",
    "due",
)

_PURE_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_YEAR_LIKE = re.compile(r"^\d{4}$")
_LOOSE_DATE = re.compile(r"\d{4}-\d{2}-\d{2}|\d{2}/\d{2}/\d{4}|\d{4}/\d{2}/\d{2}")
_QUARTER_LABELS = (
    re.compile(r"^Q(?P<quarter>[1-4])\s+(?P<year>\d{4})$", re.IGNORECASE),
    re.compile(r"^(?P<year>\d{4})\s*-?\s*Q(?P<quarter>[1-4])$", re.IGNORECASE),
)


def is_pure_number_text(text: str) -> bool:
    """
    True for plain numeric strings that are not a bare four-digit year.
    """

    stripped = text.strip()
    return bool(_PURE_NUMBER.match(stripped)) and not _YEAR_LIKE.match(stripped)


def match_date_pattern(text: str) -> str | None:
    """
    Return the name of the first known date pattern matching ``text``.

    A bare four-digit year only counts when it is a plausible calendar year.
    """

    stripped = text.strip()
    for name, pattern in DATE_PATTERNS:
        if not pattern.match(stripped):
            continue
        if name == "year" and not MIN_YEAR <= int(stripped) <= MAX_YEAR:
            return None
        return name
    return None


def parse_date_cell(cell: CellValue) -> datetime | None:
    """
    Parse a tagged cell into a naive datetime, or None.

    Numbers are read through their text form so only four-digit years
    survive the pure-number guard. Timezone-aware values are converted to
    UTC and made naive.
    """

    if isinstance(cell, (NullCell, BoolCell)):
        return None
    if isinstance(cell, DateLikeCell):
        return _normalize(cell.value)
    if isinstance(cell, NumberCell):
        return _parse_date_text(cell_text(cell))
    if isinstance(cell, TextCell):
        return _parse_date_text(cell.value)
    return None


def parse_date_value(value: Any) -> datetime | None:
    """
    Parse a raw value into a naive datetime without range checks.
    """

    return parse_date_cell(to_cell(value))


def is_valid_date(value: Any) -> bool:
    """
    Check whether a single value is a usable calendar date.

    Only strings and date objects qualify; the parsed year must lie in
    [1900, 2100].
    """

    cell = to_cell(value)
    if not isinstance(cell, (TextCell, DateLikeCell)):
        return False
    parsed = parse_date_cell(cell)
    if parsed is None:
        return False
    return MIN_YEAR <= parsed.year <= MAX_YEAR


def looks_like_date(value: Any) -> bool:
    """
    Weak single-value date check used for aggregation column auto-detection.
    """

    if not value:
        return False

    text = str(value).strip()
    if is_pure_number_text(text):
        return False

    if isinstance(value, str) and _LOOSE_DATE.search(value):
        return True
    if isinstance(value, (date, datetime)):
        return True
    return parse_date_value(text) is not None


def column_name_suggests_date(column_name: str) -> bool:
    """
    Case-insensitive keyword match of a column name against date keywords.
    """

    normalized = column_name.lower()
    return any(keyword in normalized for keyword in DATE_NAME_KEYWORDS)


def _parse_date_text(raw: str) -> datetime | None:
    text = raw.strip()
    if not text:
        return None

    if _PURE_NUMBER.match(text):
        if not _YEAR_LIKE.match(text) or int(text) < 1:
            return None
        return datetime(int(text), 1, 1)

    for pattern in _QUARTER_LABELS:
        match = pattern.match(text)
        if match:
            year = int(match.group("year"))
            if year < 1:
                return None
            first_month = (int(match.group("quarter")) - 1) * 3 + 1
            return datetime(year, first_month, 1)

    normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return _normalize(datetime.fromisoformat(normalized))
    except ValueError:
        pass

    try:
        parsed = date_parser.parse(text, default=PARSE_DEFAULT)
        alternate = date_parser.parse(text, default=_ALTERNATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    # Year and month must come from the text itself, not from a default.
    if (parsed.year, parsed.month) != (alternate.year, alternate.month):
        return None
    return _normalize(parsed)


def _normalize(value: date) -> datetime:
    if not isinstance(value, datetime):
        return datetime.combine(value, time())
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
