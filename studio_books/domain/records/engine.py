"""Search, filter and sort over in-memory record collections."""
from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Iterable, Mapping, Sequence

from .predicates import Record, matches
from .values import coerce_datetime, is_date_value, is_empty_filter, is_number, stringify

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    key: str
    direction: str = DESC

    @property
    def ascending(self) -> bool:
        return self.direction == ASC

    def toggled(self) -> "SortSpec":
        return SortSpec(key=self.key, direction=DESC if self.ascending else ASC)


def _sign(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def _locale_key(text: str) -> tuple[str, str]:
    return (text.casefold(), text.swapcase())


def compare_values(key: str, left: Any, right: Any, ascending: bool) -> int:
    """Comparator for one sort key. Nulls sort last whatever the direction."""
    if left is None and right is None:
        return 0
    if left is None:
        return 1
    if right is None:
        return -1

    if "date" in key or is_date_value(left) or is_date_value(right):
        left_dt = coerce_datetime(left)
        right_dt = coerce_datetime(right)
        if left_dt is None and right_dt is None:
            return 0
        # unparseable dates rank above every valid date
        if left_dt is None:
            return 1 if ascending else -1
        if right_dt is None:
            return -1 if ascending else 1
        result = _sign(left_dt, right_dt)
        return result if ascending else -result

    if is_number(left) and is_number(right):
        result = _sign(left, right)
        return result if ascending else -result

    result = _sign(_locale_key(stringify(left)), _locale_key(stringify(right)))
    return result if ascending else -result


def apply_search(records: Iterable[Record], search: str, search_fields: Sequence[str]) -> list[Record]:
    records = list(records)
    if not search or not search.strip():
        return records
    needle = search.lower()
    kept: list[Record] = []
    for record in records:
        for field in search_fields:
            value = record.get(field)
            if value is None:
                continue
            if needle in stringify(value).lower():
                kept.append(record)
                break
    return kept


def apply_filters(records: Iterable[Record], filters: Mapping[str, Any] | None) -> list[Record]:
    filtered = list(records)
    for key, value in (filters or {}).items():
        if is_empty_filter(value):
            continue
        filtered = [record for record in filtered if matches(key, record, value)]
    return filtered


def apply_sort(records: Iterable[Record], sort: SortSpec | None) -> list[Record]:
    ordered = list(records)
    if sort is None or not sort.key:
        return ordered
    comparator = lambda a, b: compare_values(sort.key, a.get(sort.key), b.get(sort.key), sort.ascending)
    ordered.sort(key=cmp_to_key(comparator))
    return ordered


def compute_view(
    data: Sequence[Record],
    search: str,
    search_fields: Sequence[str],
    sort: SortSpec | None,
    filters: Mapping[str, Any] | None = None,
) -> list[Record]:
    """Search, then filter, then sort. The input sequence is never mutated."""
    searched = apply_search(data, search, search_fields)
    filtered = apply_filters(searched, filters)
    return apply_sort(filtered, sort)


class RecordView:
    """Stateful list view over one collection, recomputed only when an input changes."""

    def __init__(
        self,
        data: Sequence[Record],
        search_fields: Sequence[str],
        default_sort: str,
        default_direction: str = DESC,
    ) -> None:
        self._data = data
        self._search_fields = tuple(search_fields)
        self.search_value = ""
        self.sort = SortSpec(key=default_sort, direction=default_direction)
        self.active_filters: dict[str, Any] = {}
        self._cached: list[Record] | None = None

    @property
    def current_sort(self) -> str:
        return self.sort.key

    @property
    def sort_direction(self) -> str:
        return self.sort.direction

    def set_data(self, data: Sequence[Record]) -> None:
        self._data = data
        self._cached = None

    def set_search_value(self, value: str) -> None:
        self.search_value = value
        self._cached = None

    def handle_sort_change(self, sort_key: str) -> None:
        self.sort = SortSpec(key=sort_key, direction=self.sort.direction)
        self._cached = None

    def handle_sort_direction_toggle(self) -> None:
        self.sort = self.sort.toggled()
        self._cached = None

    def handle_filter_change(self, filters: Mapping[str, Any]) -> None:
        self.active_filters = dict(filters)
        self._cached = None

    @property
    def filtered_and_sorted_data(self) -> list[Record]:
        if self._cached is None:
            self._cached = compute_view(
                self._data,
                self.search_value,
                self._search_fields,
                self.sort,
                self.active_filters,
            )
        return list(self._cached)
