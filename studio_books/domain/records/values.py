"""Value coercion shared by the record filter and sort steps."""
from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
)


def is_empty_filter(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple, set, frozenset)) and len(value) == 0:
        return True
    return False


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def as_number(value: Any) -> float | Decimal:
    """Numeric view of a record field; missing or non-numeric counts as zero.

    Numeric strings such as ``"20000"`` or ``"1,250.50"`` are parsed.
    """
    if is_number(value):
        return value
    if not isinstance(value, str):
        return 0
    try:
        parsed = Decimal(value.strip().replace(",", ""))
    except InvalidOperation:
        return 0
    return parsed if parsed.is_finite() else 0


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def is_date_value(value: Any) -> bool:
    return isinstance(value, (date, datetime))


def parse_date_string(text: str) -> datetime | None:
    text = text.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def coerce_datetime(value: Any) -> datetime | None:
    """Best-effort naive UTC datetime for dates, datetimes and date-like strings."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = parse_date_string(value)
    else:
        return None
    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def coerce_date(value: Any) -> date | None:
    parsed = coerce_datetime(value)
    return parsed.date() if parsed is not None else None


def looks_like_date(value: Any) -> bool:
    return is_date_value(value) or (isinstance(value, str) and parse_date_string(value) is not None)
