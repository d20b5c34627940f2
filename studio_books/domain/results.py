"""Domain-level results for the financial statements."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Iterable, Sequence, Union

from studio_books.config import SETTINGS

from .payment_methods import CASH, parse_payment_method
from .periods import DateWindow


@dataclass(frozen=True)
class Assets:
    cash: Decimal
    accounts_receivable: Decimal
    other_assets: Decimal
    total_assets: Decimal


@dataclass(frozen=True)
class Liabilities:
    accounts_payable: Decimal
    accounting_liabilities: Decimal
    total_liabilities: Decimal


@dataclass(frozen=True)
class Equity:
    retained_earnings: Decimal
    total_equity: Decimal


@dataclass(frozen=True)
class BalanceSheetStatement:
    firm_id: str
    assets: Assets
    liabilities: Liabilities
    equity: Equity
    generated_at: datetime

    @property
    def liabilities_and_equity(self) -> Decimal:
        return self.liabilities.total_liabilities + self.equity.total_equity

    def is_balanced(self, tolerance: Decimal = SETTINGS.balance_tolerance) -> bool:
        return abs(self.assets.total_assets - self.liabilities_and_equity) < tolerance

    def balance_status(self, tolerance: Decimal = SETTINGS.balance_tolerance) -> str:
        return "BALANCED" if self.is_balanced(tolerance) else "UNBALANCED"


@dataclass(frozen=True)
class CashFlowEntry:
    """Common projection of every payment-in/out row."""

    date: date | None
    amount: Decimal
    payment_method: str | None

    kind: ClassVar[str] = ""
    type_label: ClassVar[str] = ""

    @property
    def label(self) -> str:
        raise NotImplementedError

    @property
    def method_bucket(self) -> str:
        return parse_payment_method(self.payment_method)


@dataclass(frozen=True)
class PaymentReceipt(CashFlowEntry):
    source: str = ""

    kind: ClassVar[str] = "payment"
    type_label: ClassVar[str] = "Payment"

    @property
    def label(self) -> str:
        return self.source


@dataclass(frozen=True)
class AdvanceReceipt(CashFlowEntry):
    source: str = ""

    kind: ClassVar[str] = "advance"
    type_label: ClassVar[str] = "Advance"

    @property
    def label(self) -> str:
        return self.source


@dataclass(frozen=True)
class AccountingCredit(CashFlowEntry):
    source: str = ""

    kind: ClassVar[str] = "accounting_credit"
    type_label: ClassVar[str] = "Accounting"

    @property
    def label(self) -> str:
        return self.source


@dataclass(frozen=True)
class ExpenseOutflow(CashFlowEntry):
    description: str = ""

    kind: ClassVar[str] = "expense"
    type_label: ClassVar[str] = "Expense"

    @property
    def label(self) -> str:
        return self.description


@dataclass(frozen=True)
class AccountingDebit(CashFlowEntry):
    description: str = ""

    kind: ClassVar[str] = "accounting_debit"
    type_label: ClassVar[str] = "Accounting"

    @property
    def label(self) -> str:
        return self.description


PaymentIn = Union[PaymentReceipt, AdvanceReceipt, AccountingCredit]
PaymentOut = Union[ExpenseOutflow, AccountingDebit]


def sum_amounts(entries: Iterable[CashFlowEntry]) -> Decimal:
    return sum((entry.amount for entry in entries), Decimal("0"))


def split_by_method(entries: Iterable[CashFlowEntry]) -> tuple[Decimal, Decimal]:
    cash = Decimal("0")
    digital = Decimal("0")
    for entry in entries:
        if entry.method_bucket == CASH:
            cash += entry.amount
        else:
            digital += entry.amount
    return cash, digital


@dataclass(frozen=True)
class FinanceStatement:
    firm_id: str
    time_range: str
    window: DateWindow | None
    payment_in: Sequence[PaymentIn]
    payment_out: Sequence[PaymentOut]
    payment_in_total: Decimal
    payment_out_total: Decimal
    cash_in: Decimal
    digital_in: Decimal
    cash_out: Decimal
    digital_out: Decimal
    generated_at: datetime

    @property
    def net_profit(self) -> Decimal:
        return self.payment_in_total - self.payment_out_total

    def payment_out_categories(self) -> list[str]:
        seen: list[str] = []
        for entry in self.payment_out:
            prefix = entry.label.split(":")[0]
            if prefix not in seen:
                seen.append(prefix)
        return seen


@dataclass(frozen=True)
class MethodSplit:
    cash: Decimal = Decimal("0")
    digital: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.cash + self.digital


@dataclass(frozen=True)
class ExpenseSummary:
    total: Decimal
    count: int
    overall: MethodSplit
    monthly_total: Decimal
    monthly: MethodSplit
    yearly_total: Decimal
    yearly: MethodSplit
    average: Decimal
    category_totals: dict[str, Decimal] = field(default_factory=dict)
    top_categories: Sequence[tuple[str, Decimal]] = field(default_factory=tuple)
