"""In-memory ledger repository."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Sequence, TypeVar

from studio_books.domain.models import (
    AccountingEntry,
    Assignment,
    ClosingBalance,
    Event,
    Expense,
    Firm,
    Payment,
    SalaryPayment,
)
from studio_books.domain.periods import DateWindow, in_window
from studio_books.domain.repositories import LedgerRepository

Row = TypeVar("Row")


def scope_rows(
    rows: Iterable[Row],
    firm_id: str,
    window: DateWindow | None = None,
    date_of: Callable[[Row], date | None] | None = None,
) -> list[Row]:
    """Rows belonging to ``firm_id`` whose date column falls inside ``window``."""
    scoped = [row for row in rows if row.firm_id == firm_id]
    if window is None or date_of is None:
        return scoped
    return [row for row in scoped if in_window(window, date_of(row))]


def select_accounting_entries(
    entries: Iterable[AccountingEntry],
    firm_id: str,
    window: DateWindow | None,
    reflect_to_company: bool | None,
) -> list[AccountingEntry]:
    scoped = scope_rows(entries, firm_id, window, lambda e: e.entry_date)
    if reflect_to_company is None:
        return scoped
    return [entry for entry in scoped if entry.reflect_to_company == reflect_to_company]


@dataclass
class InMemoryLedgerRepository(LedgerRepository):
    firms: Sequence[Firm] = field(default_factory=list)
    payments: Sequence[Payment] = field(default_factory=list)
    events: Sequence[Event] = field(default_factory=list)
    closing_balances: Sequence[ClosingBalance] = field(default_factory=list)
    expenses: Sequence[Expense] = field(default_factory=list)
    staff_payments: Sequence[SalaryPayment] = field(default_factory=list)
    freelancer_payments: Sequence[SalaryPayment] = field(default_factory=list)
    staff_assignments: Sequence[Assignment] = field(default_factory=list)
    freelancer_assignments: Sequence[Assignment] = field(default_factory=list)
    accounting_entries: Sequence[AccountingEntry] = field(default_factory=list)

    def get_firm(self, firm_id: str) -> Firm | None:
        return next((firm for firm in self.firms if firm.id == firm_id), None)

    def list_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Payment]:
        return scope_rows(self.payments, firm_id, window, lambda p: p.payment_date)

    def list_events(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Event]:
        return scope_rows(self.events, firm_id, window, lambda e: e.event_date)

    def list_closing_balances(self, firm_id: str) -> Sequence[ClosingBalance]:
        return scope_rows(self.closing_balances, firm_id)

    def list_expenses(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Expense]:
        return scope_rows(self.expenses, firm_id, window, lambda e: e.expense_date)

    def list_staff_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[SalaryPayment]:
        return scope_rows(self.staff_payments, firm_id, window, lambda p: p.payment_date)

    def list_freelancer_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[SalaryPayment]:
        return scope_rows(self.freelancer_payments, firm_id, window, lambda p: p.payment_date)

    def list_staff_assignments(self, firm_id: str) -> Sequence[Assignment]:
        return scope_rows(self.staff_assignments, firm_id)

    def list_freelancer_assignments(self, firm_id: str) -> Sequence[Assignment]:
        return scope_rows(self.freelancer_assignments, firm_id)

    def list_accounting_entries(
        self,
        firm_id: str,
        window: DateWindow | None = None,
        reflect_to_company: bool | None = None,
    ) -> Sequence[AccountingEntry]:
        return select_accounting_entries(self.accounting_entries, firm_id, window, reflect_to_company)
