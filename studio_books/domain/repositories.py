"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import (
    AccountingEntry,
    Assignment,
    ClosingBalance,
    Event,
    Expense,
    Firm,
    Payment,
    SalaryPayment,
)
from .periods import DateWindow


class LedgerRepository(Protocol):
    """Read access to one firm's ledgers.

    Windowed reads project the window onto each ledger's own date column.
    """

    def get_firm(self, firm_id: str) -> Firm | None:
        ...

    def list_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Payment]:
        ...

    def list_events(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Event]:
        ...

    def list_closing_balances(self, firm_id: str) -> Sequence[ClosingBalance]:
        ...

    def list_expenses(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Expense]:
        ...

    def list_staff_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[SalaryPayment]:
        ...

    def list_freelancer_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[SalaryPayment]:
        ...

    def list_staff_assignments(self, firm_id: str) -> Sequence[Assignment]:
        ...

    def list_freelancer_assignments(self, firm_id: str) -> Sequence[Assignment]:
        ...

    def list_accounting_entries(
        self,
        firm_id: str,
        window: DateWindow | None = None,
        reflect_to_company: bool | None = None,
    ) -> Sequence[AccountingEntry]:
        ...
