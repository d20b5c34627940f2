"""Application-level DTOs for report generation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from studio_books.domain.models import Firm
from studio_books.domain.periods import TimeRange
from studio_books.domain.results import BalanceSheetStatement, ExpenseSummary, FinanceStatement
from studio_books.domain.salary import SalarySummary


@dataclass(slots=True, frozen=True)
class FinanceReportRequest:
    firm_id: str
    time_range: str = TimeRange.GLOBAL.value
    custom_start: date | None = None
    today: date | None = None


@dataclass(slots=True, frozen=True)
class BalanceSheetResponse:
    statement: BalanceSheetStatement
    firm: Firm | None


@dataclass(slots=True, frozen=True)
class FinanceReportResponse:
    statement: FinanceStatement
    firm: Firm | None


@dataclass(slots=True, frozen=True)
class ExpenseSummaryResponse:
    summary: ExpenseSummary
    firm: Firm | None


@dataclass(slots=True, frozen=True)
class SalarySummaryResponse:
    staff: tuple[SalarySummary, ...]
    freelancers: tuple[SalarySummary, ...]
    firm: Firm | None
