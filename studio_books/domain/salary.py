"""Per-person salary summaries for the staff and freelancer list screens."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from .models import Assignment, SalaryPayment

COMPLETED_STATUSES = frozenset({"completed", "complete", "done"})


@dataclass(frozen=True)
class SalarySummary:
    payee: str
    total_earnings: Decimal
    paid_amount: Decimal
    total_assignments: int
    total_tasks: int
    completed_tasks: int

    @property
    def pending_amount(self) -> Decimal:
        return max(Decimal("0"), self.total_earnings - self.paid_amount)

    def as_record(self) -> dict[str, Any]:
        return {
            "name": self.payee,
            "total_earnings": self.total_earnings,
            "paid_amount": self.paid_amount,
            "pending_amount": self.pending_amount,
            "total_assignments": self.total_assignments,
            "total_tasks": self.total_tasks,
            "completed_tasks": self.completed_tasks,
        }


def _payee_key(name: str) -> str:
    return " ".join(name.split()).casefold()


def summarize_salaries(
    assignments: Iterable[Assignment],
    payments: Iterable[SalaryPayment],
) -> list[SalarySummary]:
    """One summary per payee, in first-seen order.

    Every assignment is one task; it counts as completed when its status is
    one of ``COMPLETED_STATUSES``. Rows without a payee name are ignored.
    """
    names: dict[str, str] = {}
    earnings: dict[str, Decimal] = {}
    paid: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    completed: dict[str, int] = {}

    def register(name: str) -> str | None:
        key = _payee_key(name)
        if not key:
            return None
        if key not in names:
            names[key] = name.strip()
            earnings[key] = Decimal("0")
            paid[key] = Decimal("0")
            counts[key] = 0
            completed[key] = 0
        return key

    for assignment in assignments:
        key = register(assignment.payee)
        if key is None:
            continue
        earnings[key] += assignment.amount or Decimal("0")
        counts[key] += 1
        if assignment.status.strip().lower() in COMPLETED_STATUSES:
            completed[key] += 1

    for payment in payments:
        key = register(payment.payee)
        if key is None:
            continue
        paid[key] += payment.amount or Decimal("0")

    return [
        SalarySummary(
            payee=names[key],
            total_earnings=earnings[key],
            paid_amount=paid[key],
            total_assignments=counts[key],
            total_tasks=counts[key],
            completed_tasks=completed[key],
        )
        for key in names
    ]
