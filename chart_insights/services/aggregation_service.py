"""
chart_insights/services/aggregation_service.py

Row re-aggregation for chart consumption.

Two modes are supported:

* time buckets - group rows on a date column by day, week, month, quarter
  or year and label each bucket for display;
* key groups - group rows on a categorical column and reduce the chosen
  value columns with sum, avg, count, min, max or distinct.

Both modes are pure: input rows are never mutated and a malformed request
returns the input unchanged.

Bucket keys and labels
----------------------
day      key ``yyyy-MM-dd``  label ``Jan 5, 2024``  (row date)
week     key ``yyyy-MM-dd``  label ``Dec 31, 2023`` (week start, Sunday)
month    key ``yyyy-MM``     label ``Jan 2024``
quarter  key ``yyyy-Qn``     label ``Q1 2024``
year     key ``yyyy``        label ``2024``

Every label parses back into a date inside the same bucket, so
re-aggregating labelled output at the same granularity changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Mapping, Sequence

import numpy as np

from chart_insights.domain.cells import NullCell, cell_text, is_blank, to_cell
from chart_insights.domain.vocabulary import AGGREGATION_METHODS, GRANULARITIES, AggregationMethod, Granularity
from chart_insights.logging_utils import NULL_LOGGER, DiagnosticLogger
from chart_insights.parsing.dates import looks_like_date, parse_date_value
from chart_insights.parsing.numeric import parse_numeric_value

Row = dict[str, Any]
Rows = Sequence[Mapping[str, Any]]

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


# ---------------------------------------------------------------------------
# Calendar buckets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Bucket:
    """
    One calendar bucket: sortable start, grouping key and display label.
    """

    start: datetime
    key: str
    label: str


def _day_label(value: datetime) -> str:
    return f"{_MONTH_ABBR[value.month - 1]} {value.day}, {value.year}"


def bucket_for(moment: datetime, granularity: str) -> Bucket:
    """
    Place ``moment`` into its calendar bucket for ``granularity``.

    Weeks start on Sunday.
    """

    day_start = moment.replace(hour=0, minute=0, second=0, microsecond=0)

    if granularity == Granularity.DAY:
        return Bucket(day_start, day_start.strftime("%Y-%m-%d"), _day_label(moment))

    if granularity == Granularity.WEEK:
        week_start = day_start - timedelta(days=(day_start.weekday() + 1) % 7)
        return Bucket(week_start, week_start.strftime("%Y-%m-%d"), _day_label(week_start))

    if granularity == Granularity.MONTH:
        month_start = day_start.replace(day=1)
        return Bucket(
            month_start,
            f"{month_start.year:04d}-{month_start.month:02d}",
            f"{_MONTH_ABBR[moment.month - 1]} {moment.year}",
        )

    if granularity == Granularity.QUARTER:
        quarter = (moment.month - 1) // 3 + 1
        quarter_start = day_start.replace(month=(quarter - 1) * 3 + 1, day=1)
        return Bucket(quarter_start, f"{moment.year:04d}-Q{quarter}", f"Q{quarter} {moment.year}")

    if granularity == Granularity.YEAR:
        year_start = day_start.replace(month=1, day=1)
        return Bucket(year_start, f"{moment.year:04d}", f"{moment.year}")

    raise ValueError(f"Unsupported granularity: {granularity}")


# ---------------------------------------------------------------------------
# Reductions
# ---------------------------------------------------------------------------


def _as_output_number(result: Any, values: Sequence[float | int]) -> float | int:
    if all(isinstance(value, int) for value in values) and float(result).is_integer():
        return int(result)
    return float(result)


def reduce_values(values: Sequence[float | int], method: str) -> float | int | None:
    """
    Reduce parsed numeric values; ``None`` when there is nothing to reduce.

    Unknown methods reduce with ``sum``.
    """

    if not values:
        return None
    if method == AggregationMethod.COUNT:
        return len(values)
    if method == AggregationMethod.DISTINCT:
        return len(set(values))

    array = np.asarray(values, dtype=np.float64)
    if method == AggregationMethod.AVG:
        return float(np.mean(array))
    if method == AggregationMethod.MIN:
        return _as_output_number(np.min(array), values)
    if method == AggregationMethod.MAX:
        return _as_output_number(np.max(array), values)
    return _as_output_number(np.sum(array), values)


def _ordered_columns(rows: Sequence[Mapping[str, Any]]) -> list[str]:
    seen: dict[str, None] = {}
    for row in rows:
        for name in row.keys():
            seen.setdefault(name, None)
    return list(seen)


def _collapse_column(values: list[Any]) -> Any:
    """
    Sum all-numeric columns, otherwise keep the shared or first value.
    """

    present = [value for value in values if not is_blank(to_cell(value))]
    if not present:
        return None

    numbers = [parse_numeric_value(value) for value in present]
    parsed = [number for number in numbers if number is not None]
    if len(parsed) == len(present):
        return reduce_values(parsed, AggregationMethod.SUM)

    # Shared value when all members agree, otherwise the first member's.
    return present[0]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


@dataclass
class _TimeGroup:
    bucket: Bucket
    rows: list[Mapping[str, Any]] = field(default_factory=list)


class AggregationService:
    """
    Stateless re-aggregation of row sets for chart rendering.
    """

    def __init__(self, *, logger: DiagnosticLogger | None = None) -> None:
        self._logger = logger or NULL_LOGGER

    def aggregate_by_granularity(
        self,
        rows: Rows | None,
        granularity: str,
        date_column: str | None = None,
    ) -> list[Row]:
        """
        Group rows into calendar buckets, ordered by bucket start.

        Args:
            rows: Input rows; never mutated.
            granularity: ``day``, ``week``, ``month``, ``quarter`` or ``year``.
            date_column: Column to bucket on. When omitted, the first column
                whose first-row value looks like a date is used.

        Returns:
            One row per bucket with the date column replaced by the bucket
            label, or the input unchanged when the request cannot be served.
        """

        if not rows:
            return list(rows or [])

        if granularity not in GRANULARITIES:
            self._logger.warn("aggregation_fallback", reason="unsupported_granularity", granularity=granularity)
            return list(rows)

        column = date_column or self._detect_date_column(rows[0])
        if column is None:
            self._logger.warn("aggregation_fallback", reason="no_date_column", granularity=granularity)
            return list(rows)

        groups: dict[str, _TimeGroup] = {}
        dropped = 0
        for row in rows:
            moment = parse_date_value(row.get(column))
            if moment is None:
                dropped += 1
                continue
            bucket = bucket_for(moment, granularity)
            group = groups.get(bucket.key)
            if group is None:
                group = groups[bucket.key] = _TimeGroup(bucket=bucket)
            group.rows.append(row)

        if dropped:
            self._logger.log("aggregation_rows_dropped", column=column, dropped=dropped, total=len(rows))

        ordered = sorted(groups.values(), key=lambda item: item.bucket.start)
        output = [self._collapse_time_group(group, column) for group in ordered]
        self._logger.log(
            "aggregated_by_granularity",
            granularity=granularity,
            column=column,
            input_rows=len(rows),
            output_rows=len(output),
        )
        return output

    def aggregate_by_key(
        self,
        rows: Rows | None,
        group_by_column: str | None,
        value_columns: Sequence[str] | None,
        method: str = AggregationMethod.SUM,
    ) -> list[Row]:
        """
        Group rows on ``group_by_column`` and reduce ``value_columns``.

        Groups appear in first-seen order. Non-value columns keep the first
        row's value; value cells with no numeric entries become ``None``.
        """

        if not rows or not group_by_column or not value_columns:
            if rows:
                self._logger.warn(
                    "aggregation_fallback",
                    reason="missing_group_or_values",
                    group_by_column=group_by_column,
                )
            return list(rows or [])

        if method not in AGGREGATION_METHODS:
            self._logger.warn("unknown_aggregation_method", method=method, fallback=AggregationMethod.SUM)

        groups: dict[str, list[Mapping[str, Any]]] = {}
        dropped = 0
        for row in rows:
            cell = to_cell(row.get(group_by_column))
            if isinstance(cell, NullCell):
                dropped += 1
                continue
            groups.setdefault(cell_text(cell), []).append(row)

        if dropped:
            self._logger.log("aggregation_rows_dropped", column=group_by_column, dropped=dropped, total=len(rows))

        value_set = set(value_columns)
        output: list[Row] = []
        for members in groups.values():
            first = members[0]
            aggregated: Row = {}
            for name in first.keys():
                if name not in value_set:
                    aggregated[name] = first[name]
            for name in value_columns:
                numbers = [parse_numeric_value(member.get(name)) for member in members]
                aggregated[name] = reduce_values([number for number in numbers if number is not None], method)
            output.append({name: aggregated[name] for name in _key_order(first, value_columns)})
        return output

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _detect_date_column(first_row: Mapping[str, Any]) -> str | None:
        for name, value in first_row.items():
            if looks_like_date(value):
                return name
        return None

    @staticmethod
    def _collapse_time_group(group: _TimeGroup, date_column: str) -> Row:
        collapsed: Row = {}
        for name in _ordered_columns(group.rows):
            if name == date_column:
                collapsed[name] = group.bucket.label
                continue
            collapsed[name] = _collapse_column([row.get(name) for row in group.rows])
        return collapsed


def _key_order(first_row: Mapping[str, Any], value_columns: Sequence[str]) -> list[str]:
    order = list(first_row.keys())
    order.extend(name for name in value_columns if name not in first_row)
    return order


def aggregate_by_granularity(
    rows: Rows | None,
    granularity: str,
    date_column: str | None = None,
    *,
    logger: DiagnosticLogger | None = None,
) -> list[Row]:
    """
    Bucket ``rows`` by calendar ``granularity``; see :class:`AggregationService`.
    """

    return AggregationService(logger=logger).aggregate_by_granularity(rows, granularity, date_column)


def aggregate_by_key(
    rows: Rows | None,
    group_by_column: str | None,
    value_columns: Sequence[str] | None,
    method: str = AggregationMethod.SUM,
    *,
    logger: DiagnosticLogger | None = None,
) -> list[Row]:
    """
    Group ``rows`` on a key column and reduce value columns with ``method``.
    """

    return AggregationService(logger=logger).aggregate_by_key(rows, group_by_column, value_columns, method)
