"""Reporting windows for the finance report."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum


class TimeRange(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"
    GLOBAL = "global"


_LABELS = {
    "global": "All Time",
    "week": "This Week",
    "month": "This Month",
    "quarter": "This Quarter",
    "year": "This Year",
    "custom": "Custom Range",
}


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar-day window."""

    start: date
    end: date

    def contains(self, value: date | None) -> bool:
        if value is None:
            return False
        return self.start <= value <= self.end


def normalize_time_range(time_range: str | TimeRange) -> str:
    if isinstance(time_range, TimeRange):
        return time_range.value
    return str(time_range or "").strip().lower()


def _months_back(d: date, months: int) -> date:
    month_index = (d.month - 1) - months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1)


def resolve_window(
    time_range: str | TimeRange,
    today: date | None = None,
    custom_start: date | None = None,
) -> DateWindow | None:
    """Return the window for ``time_range``; ``None`` means all time.

    ``quarter`` reaches back to the first day of the month three months ago
    rather than the calendar quarter. ``custom`` without a start date and any
    unknown range fall back to all time.
    """
    key = normalize_time_range(time_range)
    ref = today or date.today()

    if key == TimeRange.CUSTOM.value:
        if custom_start is None:
            return None
        return DateWindow(start=custom_start, end=ref)
    if key == TimeRange.WEEK.value:
        return DateWindow(start=ref - timedelta(days=7), end=ref)
    if key == TimeRange.MONTH.value:
        return DateWindow(start=ref.replace(day=1), end=ref)
    if key == TimeRange.QUARTER.value:
        return DateWindow(start=_months_back(ref, 3), end=ref)
    if key == TimeRange.YEAR.value:
        return DateWindow(start=date(ref.year, 1, 1), end=ref)
    return None


def time_range_label(time_range: str | TimeRange) -> str:
    key = normalize_time_range(time_range)
    if key in _LABELS:
        return _LABELS[key]
    return key[:1].upper() + key[1:]


def in_window(window: DateWindow | None, value: date | None) -> bool:
    if window is None:
        return True
    return window.contains(value)
