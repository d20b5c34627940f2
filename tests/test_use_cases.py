import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pytest

from studio_books.application.dto import FinanceReportRequest
from studio_books.application.use_cases import (
    GenerateBalanceSheetUseCase,
    GenerateFinanceReportUseCase,
    ReportContext,
    ReportGenerationError,
    SummarizeExpensesUseCase,
)
from studio_books.domain.models import AccountingEntry, EntryType, Event, Expense, Firm, Payment
from studio_books.domain.periods import TimeRange
from studio_books.infrastructure.repositories.memory_repository import InMemoryLedgerRepository

FIRM = "firm-1"
OTHER_FIRM = "firm-2"


def make_repository(**overrides) -> InMemoryLedgerRepository:
    data = dict(
        firms=[Firm(id=FIRM, name="Lens & Light Studio", address="MG Road")],
        payments=[
            Payment(id="p1", firm_id=FIRM, amount=Decimal("500"), payment_date=date(2024, 5, 10), payment_method="Cash"),
            Payment(id="p2", firm_id=OTHER_FIRM, amount=Decimal("9000"), payment_date=date(2024, 5, 10)),
        ],
        events=[
            Event(id="e1", firm_id=FIRM, title="Wedding", event_date=date(2024, 5, 1), total_amount=Decimal("100"), advance_amount=Decimal("100")),
        ],
        expenses=[
            Expense(id="x1", firm_id=FIRM, amount=Decimal("200"), expense_date=date(2024, 5, 2), category="Travel", description="Fuel"),
        ],
        accounting_entries=[
            AccountingEntry(
                id="a1", firm_id=FIRM, amount=Decimal("30"), entry_date=date(2024, 5, 3),
                entry_type=EntryType.CREDIT, category="Capital", title="Owner", reflect_to_company=True,
            ),
            AccountingEntry(
                id="a2", firm_id=FIRM, amount=Decimal("70"), entry_date=date(2024, 5, 3),
                entry_type=EntryType.CREDIT, category="Loan", title="Private",
            ),
        ],
    )
    data.update(overrides)
    return InMemoryLedgerRepository(**data)


@dataclass
class AccountingUnavailableRepository(InMemoryLedgerRepository):
    def list_accounting_entries(self, firm_id, window=None, reflect_to_company=None):
        raise ConnectionError("accounting store offline")


@dataclass
class PaymentsUnavailableRepository(InMemoryLedgerRepository):
    def list_payments(self, firm_id, window=None):
        raise ConnectionError("payments store offline")


def test_balance_sheet_use_case_scopes_to_firm():
    context = ReportContext(repository=make_repository())

    response = GenerateBalanceSheetUseCase(context).execute(FIRM)

    assert response.firm.name == "Lens & Light Studio"
    assert response.statement.assets.cash == Decimal("600")
    assert response.statement.liabilities.accounting_liabilities == Decimal("100")
    assert response.statement.is_balanced()


def test_finance_report_only_reflects_flagged_entries():
    context = ReportContext(repository=make_repository())

    response = GenerateFinanceReportUseCase(context).execute(
        FinanceReportRequest(firm_id=FIRM, time_range="month", today=date(2024, 5, 20))
    )

    statement = response.statement
    assert statement.time_range == "month"
    assert statement.payment_in_total == Decimal("630")
    assert statement.payment_out_total == Decimal("200")


def test_finance_report_accepts_enum_time_range():
    context = ReportContext(repository=make_repository())

    response = GenerateFinanceReportUseCase(context).execute(
        FinanceReportRequest(firm_id=FIRM, time_range=TimeRange.YEAR, today=date(2024, 5, 20))
    )

    assert response.statement.time_range == "year"


def test_accounting_failure_degrades_to_empty_ledger(caplog):
    repo = AccountingUnavailableRepository(**vars(make_repository()))
    context = ReportContext(repository=repo)

    with caplog.at_level(logging.WARNING):
        balance = GenerateBalanceSheetUseCase(context).execute(FIRM)
        finance = GenerateFinanceReportUseCase(context).execute(FinanceReportRequest(firm_id=FIRM))

    assert balance.statement.assets.other_assets == Decimal("0")
    assert balance.statement.liabilities.accounting_liabilities == Decimal("0")
    assert finance.statement.payment_in_total == Decimal("600")
    assert "Accounting entries unavailable" in caplog.text


def test_other_ledger_failure_raises_report_error():
    repo = PaymentsUnavailableRepository(**vars(make_repository()))
    context = ReportContext(repository=repo)

    with pytest.raises(ReportGenerationError) as excinfo:
        GenerateBalanceSheetUseCase(context).execute(FIRM)

    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_expense_summary_use_case():
    context = ReportContext(repository=make_repository())

    response = SummarizeExpensesUseCase(context).execute(FIRM, today=date(2024, 5, 20))

    assert response.summary.total == Decimal("200")
    assert response.summary.monthly_total == Decimal("200")
    assert response.summary.top_categories[0][0] == "Travel"


def test_unknown_firm_gives_empty_reports():
    context = ReportContext(repository=make_repository())

    response = GenerateBalanceSheetUseCase(context).execute("missing")

    assert response.firm is None
    assert response.statement.assets.total_assets == Decimal("0")
