"""Application services orchestrating report generation."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Mapping

from studio_books.application.dto import (
    BalanceSheetResponse,
    ExpenseSummaryResponse,
    FinanceReportRequest,
    FinanceReportResponse,
    SalarySummaryResponse,
)
from studio_books.config import SETTINGS
from studio_books.domain.periods import normalize_time_range, resolve_window
from studio_books.domain.repositories import LedgerRepository
from studio_books.domain.salary import summarize_salaries
from studio_books.domain.services import BalanceSheetCalculator, ExpenseAnalyzer, FinanceReportCalculator

logger = logging.getLogger(__name__)

ACCOUNTING_LEDGER = "accounting_entries"


class ReportGenerationError(Exception):
    """A ledger read failed and the report could not be produced."""


@dataclass(slots=True)
class ReportContext:
    repository: LedgerRepository
    balance_sheet_calculator: BalanceSheetCalculator = field(default_factory=BalanceSheetCalculator)
    finance_calculator: FinanceReportCalculator = field(default_factory=FinanceReportCalculator)
    expense_analyzer: ExpenseAnalyzer = field(default_factory=ExpenseAnalyzer)
    max_workers: int = SETTINGS.fetch_workers


def fetch_ledgers(
    firm_id: str,
    reads: Mapping[str, Callable[[], Any]],
    max_workers: int,
) -> dict[str, Any]:
    """Run every ledger read concurrently and wait for all of them.

    A failed accounting-entries read is logged and replaced by an empty
    ledger; any other failure aborts with ``ReportGenerationError``.
    """
    results: dict[str, Any] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(reads)))) as executor:
        futures: dict[str, Future] = {name: executor.submit(read) for name, read in reads.items()}
        for name, future in futures.items():
            try:
                results[name] = future.result()
            except Exception as exc:
                if name == ACCOUNTING_LEDGER:
                    logger.warning("Accounting entries unavailable for firm %s, continuing without them: %s", firm_id, exc)
                    results[name] = ()
                    continue
                logger.error("Reading %s failed for firm %s: %s", name, firm_id, exc)
                raise ReportGenerationError(f"Failed to read {name} for firm {firm_id}") from exc
    logger.debug("Fetched %d ledgers for firm %s", len(results), firm_id)
    return results


class GenerateBalanceSheetUseCase:
    def __init__(self, context: ReportContext) -> None:
        self._context = context

    def execute(self, firm_id: str) -> BalanceSheetResponse:
        repo = self._context.repository
        ledgers = fetch_ledgers(
            firm_id,
            {
                "firm": lambda: repo.get_firm(firm_id),
                "payments": lambda: repo.list_payments(firm_id),
                "events": lambda: repo.list_events(firm_id),
                "closing_balances": lambda: repo.list_closing_balances(firm_id),
                "expenses": lambda: repo.list_expenses(firm_id),
                "staff_payments": lambda: repo.list_staff_payments(firm_id),
                "freelancer_payments": lambda: repo.list_freelancer_payments(firm_id),
                ACCOUNTING_LEDGER: lambda: repo.list_accounting_entries(firm_id),
            },
            self._context.max_workers,
        )
        statement = self._context.balance_sheet_calculator.compute(
            firm_id=firm_id,
            payments=ledgers["payments"],
            events=ledgers["events"],
            expenses=ledgers["expenses"],
            staff_payments=ledgers["staff_payments"],
            freelancer_payments=ledgers["freelancer_payments"],
            accounting_entries=ledgers[ACCOUNTING_LEDGER],
            closing_balances=ledgers["closing_balances"],
        )
        logger.info(
            "Balance sheet for firm %s: assets=%s liabilities=%s equity=%s",
            firm_id,
            statement.assets.total_assets,
            statement.liabilities.total_liabilities,
            statement.equity.total_equity,
        )
        return BalanceSheetResponse(statement=statement, firm=ledgers["firm"])


class GenerateFinanceReportUseCase:
    def __init__(self, context: ReportContext) -> None:
        self._context = context

    def execute(self, request: FinanceReportRequest) -> FinanceReportResponse:
        repo = self._context.repository
        firm_id = request.firm_id
        window = resolve_window(request.time_range, today=request.today, custom_start=request.custom_start)
        ledgers = fetch_ledgers(
            firm_id,
            {
                "firm": lambda: repo.get_firm(firm_id),
                "payments": lambda: repo.list_payments(firm_id, window),
                "all_events": lambda: repo.list_events(firm_id),
                "events": lambda: repo.list_events(firm_id, window),
                "expenses": lambda: repo.list_expenses(firm_id, window),
                ACCOUNTING_LEDGER: lambda: repo.list_accounting_entries(firm_id, window, reflect_to_company=True),
            },
            self._context.max_workers,
        )
        statement = self._context.finance_calculator.compute(
            firm_id=firm_id,
            time_range=normalize_time_range(request.time_range),
            window=window,
            payments=ledgers["payments"],
            events=ledgers["events"],
            expenses=ledgers["expenses"],
            accounting_entries=ledgers[ACCOUNTING_LEDGER],
            event_titles={event.id: event.title for event in ledgers["all_events"]},
        )
        logger.info(
            "Finance report for firm %s (%s): in=%s out=%s net=%s",
            firm_id,
            request.time_range,
            statement.payment_in_total,
            statement.payment_out_total,
            statement.net_profit,
        )
        return FinanceReportResponse(statement=statement, firm=ledgers["firm"])


class SummarizeExpensesUseCase:
    def __init__(self, context: ReportContext) -> None:
        self._context = context

    def execute(self, firm_id: str, today: date | None = None) -> ExpenseSummaryResponse:
        repo = self._context.repository
        ledgers = fetch_ledgers(
            firm_id,
            {
                "firm": lambda: repo.get_firm(firm_id),
                "expenses": lambda: repo.list_expenses(firm_id),
            },
            self._context.max_workers,
        )
        summary = self._context.expense_analyzer.summarize(ledgers["expenses"], today=today)
        return ExpenseSummaryResponse(summary=summary, firm=ledgers["firm"])


class SummarizeSalariesUseCase:
    """Per-person earnings, payments and assignment counts for staff and freelancers."""

    def __init__(self, context: ReportContext) -> None:
        self._context = context

    def execute(self, firm_id: str) -> SalarySummaryResponse:
        repo = self._context.repository
        ledgers = fetch_ledgers(
            firm_id,
            {
                "firm": lambda: repo.get_firm(firm_id),
                "staff_payments": lambda: repo.list_staff_payments(firm_id),
                "freelancer_payments": lambda: repo.list_freelancer_payments(firm_id),
                "staff_assignments": lambda: repo.list_staff_assignments(firm_id),
                "freelancer_assignments": lambda: repo.list_freelancer_assignments(firm_id),
            },
            self._context.max_workers,
        )
        staff = summarize_salaries(ledgers["staff_assignments"], ledgers["staff_payments"])
        freelancers = summarize_salaries(ledgers["freelancer_assignments"], ledgers["freelancer_payments"])
        logger.info("Salary summary for firm %s: %d staff, %d freelancers", firm_id, len(staff), len(freelancers))
        return SalarySummaryResponse(staff=tuple(staff), freelancers=tuple(freelancers), firm=ledgers["firm"])
