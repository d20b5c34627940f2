"""Domain services implementing the accounting rules."""
from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal, localcontext
from functools import wraps
from typing import Iterable, Mapping, Sequence

from studio_books.config import SETTINGS

from .models import (
    AccountingEntry,
    ClosingBalance,
    EntryType,
    Event,
    Expense,
    Payment,
    SalaryPayment,
)
from .payment_methods import CASH, parse_payment_method
from .periods import DateWindow
from .results import (
    AccountingCredit,
    AccountingDebit,
    AdvanceReceipt,
    Assets,
    BalanceSheetStatement,
    Equity,
    ExpenseOutflow,
    ExpenseSummary,
    FinanceStatement,
    Liabilities,
    MethodSplit,
    PaymentIn,
    PaymentOut,
    PaymentReceipt,
    split_by_method,
    sum_amounts,
)

ZERO = Decimal("0")
GENERAL_PAYMENT = "General Payment"
DEFAULT_ENTRY_METHOD = "Cash"


def _in_decimal_context(method):
    @wraps(method)
    def wrapper(*args, **kwargs):
        with localcontext(SETTINGS.decimal_context):
            return method(*args, **kwargs)

    return wrapper


def _total(amounts: Iterable[Decimal | None]) -> Decimal:
    return sum((amount or ZERO for amount in amounts), ZERO)


def calculate_event_balance(
    event: Event,
    received: Decimal = ZERO,
    closed: Decimal = ZERO,
) -> Decimal:
    """Outstanding amount the client still owes for ``event``, floored at zero."""
    advance = event.advance_amount if event.advance_amount and event.advance_amount > 0 else ZERO
    balance = (event.total_amount or ZERO) - received - advance - closed
    return max(ZERO, balance)


def _amounts_by_event(rows: Iterable[tuple[str | None, Decimal]]) -> Mapping[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for event_id, amount in rows:
        if event_id is None:
            continue
        totals[event_id] += amount or ZERO
    return totals


class BalanceSheetCalculator:
    """Derives assets, liabilities and residual equity from raw ledger rows."""

    @_in_decimal_context
    def compute(
        self,
        firm_id: str,
        payments: Sequence[Payment],
        events: Sequence[Event],
        expenses: Sequence[Expense],
        staff_payments: Sequence[SalaryPayment],
        freelancer_payments: Sequence[SalaryPayment],
        accounting_entries: Sequence[AccountingEntry],
        closing_balances: Sequence[ClosingBalance] = (),
    ) -> BalanceSheetStatement:
        advances = _total(e.advance_amount for e in events if e.advance_amount and e.advance_amount > 0)
        # expenses stay on the liabilities side; cash is gross receipts
        cash = _total(p.amount for p in payments) + advances

        received = _amounts_by_event((p.event_id, p.amount) for p in payments)
        closed = _amounts_by_event((c.event_id, c.closing_amount) for c in closing_balances)
        accounts_receivable = _total(
            calculate_event_balance(e, received.get(e.id, ZERO), closed.get(e.id, ZERO)) for e in events
        )

        other_assets = _total(e.amount for e in accounting_entries if e.entry_type == EntryType.DEBIT)
        total_assets = cash + accounts_receivable + other_assets

        accounts_payable = (
            _total(e.amount for e in expenses)
            + _total(s.amount for s in staff_payments)
            + _total(f.amount for f in freelancer_payments)
        )
        accounting_liabilities = _total(e.amount for e in accounting_entries if e.entry_type == EntryType.CREDIT)
        total_liabilities = accounts_payable + accounting_liabilities

        retained_earnings = total_assets - total_liabilities

        return BalanceSheetStatement(
            firm_id=firm_id,
            assets=Assets(
                cash=cash,
                accounts_receivable=accounts_receivable,
                other_assets=other_assets,
                total_assets=total_assets,
            ),
            liabilities=Liabilities(
                accounts_payable=accounts_payable,
                accounting_liabilities=accounting_liabilities,
                total_liabilities=total_liabilities,
            ),
            equity=Equity(retained_earnings=retained_earnings, total_equity=retained_earnings),
            generated_at=datetime.now(SETTINGS.timezone),
        )


class FinanceReportCalculator:
    """Builds the payment-in/out view for one reporting window.

    Salary ledgers are not read here: salary payouts are expected to be
    recorded as expenses as well, and counting both would double the outflow.
    """

    @_in_decimal_context
    def compute(
        self,
        firm_id: str,
        time_range: str,
        window: DateWindow | None,
        payments: Sequence[Payment],
        events: Sequence[Event],
        expenses: Sequence[Expense],
        accounting_entries: Sequence[AccountingEntry],
        event_titles: Mapping[str, str] | None = None,
    ) -> FinanceStatement:
        titles = dict(event_titles or {})
        titles.update({e.id: e.title for e in events})

        payment_in: list[PaymentIn] = []
        payment_out: list[PaymentOut] = []

        for payment in payments:
            if not self._in_window(window, payment.payment_date):
                continue
            payment_in.append(
                PaymentReceipt(
                    date=payment.payment_date,
                    amount=payment.amount,
                    payment_method=payment.payment_method,
                    source=titles.get(payment.event_id or "", "") or GENERAL_PAYMENT,
                )
            )

        for event in events:
            if not event.advance_amount or event.advance_amount <= 0:
                continue
            if not self._in_window(window, event.event_date):
                continue
            payment_in.append(
                AdvanceReceipt(
                    date=event.event_date,
                    amount=event.advance_amount,
                    payment_method=event.advance_payment_method,
                    source=f"{event.title} (Advance)",
                )
            )

        for expense in expenses:
            if not self._in_window(window, expense.expense_date):
                continue
            payment_out.append(
                ExpenseOutflow(
                    date=expense.expense_date,
                    amount=expense.amount,
                    payment_method=expense.payment_method,
                    description=f"{expense.category}: {expense.description}",
                )
            )

        for entry in accounting_entries:
            if not entry.reflect_to_company or not self._in_window(window, entry.entry_date):
                continue
            label = f"{entry.category} - {entry.title}"
            method = entry.payment_method or DEFAULT_ENTRY_METHOD
            if entry.entry_type == EntryType.CREDIT:
                payment_in.append(
                    AccountingCredit(date=entry.entry_date, amount=entry.amount, payment_method=method, source=label)
                )
            elif entry.entry_type == EntryType.DEBIT:
                payment_out.append(
                    AccountingDebit(date=entry.entry_date, amount=entry.amount, payment_method=method, description=label)
                )

        payment_in = self._newest_first(payment_in)
        payment_out = self._newest_first(payment_out)
        cash_in, digital_in = split_by_method(payment_in)
        cash_out, digital_out = split_by_method(payment_out)

        return FinanceStatement(
            firm_id=firm_id,
            time_range=time_range,
            window=window,
            payment_in=tuple(payment_in),
            payment_out=tuple(payment_out),
            payment_in_total=sum_amounts(payment_in),
            payment_out_total=sum_amounts(payment_out),
            cash_in=cash_in,
            digital_in=digital_in,
            cash_out=cash_out,
            digital_out=digital_out,
            generated_at=datetime.now(SETTINGS.timezone),
        )

    @staticmethod
    def _in_window(window: DateWindow | None, value: date | None) -> bool:
        return window is None or window.contains(value)

    @staticmethod
    def _newest_first(entries: list) -> list:
        dated = [e for e in entries if e.date is not None]
        undated = [e for e in entries if e.date is None]
        dated.sort(key=lambda e: e.date, reverse=True)
        return dated + undated


class ExpenseAnalyzer:
    """Expense statistics shown on the expenses screen."""

    def __init__(self, top_n: int = 3) -> None:
        self._top_n = top_n

    @_in_decimal_context
    def summarize(self, expenses: Sequence[Expense], today: date | None = None) -> ExpenseSummary:
        ref = today or date.today()
        monthly = [e for e in expenses if e.expense_date and (e.expense_date.year, e.expense_date.month) == (ref.year, ref.month)]
        yearly = [e for e in expenses if e.expense_date and e.expense_date.year == ref.year]

        total = _total(e.amount for e in expenses)
        average = total / len(expenses) if expenses else ZERO

        category_totals: dict[str, Decimal] = {}
        for expense in expenses:
            category_totals[expense.category] = category_totals.get(expense.category, ZERO) + (expense.amount or ZERO)
        # sorted() is stable, so equal totals keep first-seen order
        top = sorted(category_totals.items(), key=lambda item: item[1], reverse=True)[: self._top_n]

        return ExpenseSummary(
            total=total,
            count=len(expenses),
            overall=self._split(expenses),
            monthly_total=_total(e.amount for e in monthly),
            monthly=self._split(monthly),
            yearly_total=_total(e.amount for e in yearly),
            yearly=self._split(yearly),
            average=average,
            category_totals=category_totals,
            top_categories=tuple(top),
        )

    @staticmethod
    def _split(expenses: Iterable[Expense]) -> MethodSplit:
        cash = ZERO
        digital = ZERO
        for expense in expenses:
            if parse_payment_method(expense.payment_method) == CASH:
                cash += expense.amount or ZERO
            else:
                digital += expense.amount or ZERO
        return MethodSplit(cash=cash, digital=digital)
