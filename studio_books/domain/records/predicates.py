"""Named filter predicates for the record view.

Each special filter key maps to one predicate ``(record, value) -> bool``.
Keys without a registered predicate use the generic matcher: list
membership, calendar-day equality for dates, then case-insensitive substring.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from .values import (
    as_number,
    coerce_date,
    is_date_value,
    looks_like_date,
    stringify,
)

Record = Mapping[str, Any]
Predicate = Callable[[Record, Any], bool]

EVENT_TYPE_SYNONYMS: dict[str, str] = {
    "ring ceremony": "Ring-Ceremony",
    "pre wedding": "Pre-Wedding",
    "wedding": "Wedding",
    "maternity photography": "Maternity Photography",
    "others": "Others",
    "ring-ceremony": "Ring-Ceremony",
    "ring_ceremony": "Ring-Ceremony",
    "pre-wedding": "Pre-Wedding",
    "pre_wedding": "Pre-Wedding",
    "maternity-photography": "Maternity Photography",
    "maternity_photography": "Maternity Photography",
}

# Filtering for these keys is done by the calling screen.
PASS_THROUGH_KEYS = frozenset({"status", "amount_range", "client_id", "staff_assignment_status", "date_range"})

PAYMENT_STATUSES = ("fully_paid", "partial_paid", "pending_payment", "overpaid", "no_earnings")
TASK_COMPLETIONS = ("all_completed", "pending_tasks", "no_tasks")

# (lower, upper, inclusive) bands; None means unbounded.
Band = tuple[float | None, float | None, bool]

EARNING_BANDS: dict[str, Band] = {
    # staff screen
    "under_10k": (None, 10000, False),
    "10k_50k": (10000, 50000, True),
    "50k_100k": (50000, 100000, True),
    "above_100k": (100000, None, False),
    # freelancer screen
    "under_5k": (None, 5000, False),
    "5k_25k": (5000, 25000, True),
    "25k_75k": (25000, 75000, True),
    "above_75k": (75000, None, False),
}

ASSIGNMENT_BANDS: dict[str, Band] = {
    "no_assignments": (0, 0, True),
    # staff screen
    "1_5": (1, 5, True),
    "6_15": (6, 15, True),
    "above_15": (15, None, False),
    # freelancer screen
    "1_3": (1, 3, True),
    "4_10": (4, 10, True),
    "above_10": (10, None, False),
}

STAFF_EARNING_RANGES = ("under_10k", "10k_50k", "50k_100k", "above_100k")
FREELANCER_EARNING_RANGES = ("under_5k", "5k_25k", "25k_75k", "above_75k")
STAFF_ASSIGNMENT_COUNTS = ("no_assignments", "1_5", "6_15", "above_15")
FREELANCER_ASSIGNMENT_COUNTS = ("no_assignments", "1_3", "4_10", "above_10")


def canonical_event_type(value: Any) -> str:
    text = stringify(value)
    return EVENT_TYPE_SYNONYMS.get(text.lower(), text)


def _as_list(value: Any) -> list[Any] | None:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return None


def _in_band(amount: Any, band: Band) -> bool:
    lower, upper, inclusive = band
    if lower is not None and (amount < lower if inclusive else amount <= lower):
        return False
    if upper is not None and (amount > upper if inclusive else amount >= upper):
        return False
    return True


def match_event_type(record: Record, value: Any) -> bool:
    stored = stringify(record.get("event_type"))
    selected = _as_list(value)
    if selected is not None:
        return stored in [canonical_event_type(v) for v in selected]
    return stored == canonical_event_type(value)


def match_role(record: Record, value: Any) -> bool:
    role = stringify(record.get("role")).lower()
    selected = _as_list(value)
    if selected is not None:
        return role in [stringify(v).lower() for v in selected]
    return role == stringify(value).lower()


def payment_status_bucket(total_earnings: Any, paid_amount: Any) -> str:
    """Single bucket for an (earnings, paid) pair.

    Checked in a fixed order so every pair lands in exactly one bucket:
    overpayment wins over ``fully_paid`` and ``no_earnings``.
    """
    earnings = as_number(total_earnings)
    paid = as_number(paid_amount)
    if paid > earnings:
        return "overpaid"
    if earnings == 0:
        return "no_earnings"
    if paid >= earnings:
        return "fully_paid"
    if paid == 0:
        return "pending_payment"
    return "partial_paid"


def match_payment_status(record: Record, value: Any) -> bool:
    if "total_earnings" not in record:
        return True
    token = stringify(value)
    if token not in PAYMENT_STATUSES:
        return True
    return payment_status_bucket(record.get("total_earnings"), record.get("paid_amount")) == token


def match_earning_range(record: Record, value: Any) -> bool:
    band = EARNING_BANDS.get(stringify(value))
    if band is None:
        return True
    return _in_band(as_number(record.get("total_earnings")), band)


def match_assignment_count(record: Record, value: Any) -> bool:
    band = ASSIGNMENT_BANDS.get(stringify(value))
    if band is None:
        return True
    return _in_band(as_number(record.get("total_assignments")), band)


def match_task_completion(record: Record, value: Any) -> bool:
    total = as_number(record.get("total_tasks"))
    completed = as_number(record.get("completed_tasks"))
    checks = {
        "all_completed": total > 0 and total == completed,
        "pending_tasks": total > 0 and completed < total,
        "no_tasks": total == 0,
    }
    return checks.get(stringify(value), True)


def match_mix_mode(record: Record, value: Any) -> bool:
    if stringify(value) == "both":
        return True
    return match_generic("mix_mode", record, value)


def _pass(record: Record, value: Any) -> bool:
    return True


PREDICATES: dict[str, Predicate] = {
    "event_type": match_event_type,
    "role": match_role,
    "payment_status": match_payment_status,
    "earning_range": match_earning_range,
    "assignment_count": match_assignment_count,
    "task_completion": match_task_completion,
    "mix_mode": match_mix_mode,
    **{key: _pass for key in PASS_THROUGH_KEYS},
}


def _is_date_filter(key: str, item_value: Any, value: Any) -> bool:
    if "date" in key:
        return True
    return looks_like_date(item_value) and looks_like_date(value)


def match_generic(key: str, record: Record, value: Any) -> bool:
    item_value = record.get(key)

    selected = _as_list(value)
    if selected is not None:
        return stringify(item_value) in [stringify(v) for v in selected]

    if _is_date_filter(key, item_value, value):
        item_day = coerce_date(item_value)
        filter_day = coerce_date(value)
        if item_day is not None and filter_day is not None:
            return item_day == filter_day

    if is_date_value(value):
        value = coerce_date(value)
    return stringify(value).lower() in stringify(item_value).lower()


def matches(key: str, record: Record, value: Any) -> bool:
    predicate = PREDICATES.get(key)
    if predicate is not None:
        return predicate(record, value)
    return match_generic(key, record, value)
