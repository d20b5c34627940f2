"""Ledger reporting and record views for a photography studio back office."""
from studio_books.application.use_cases import (
    GenerateBalanceSheetUseCase,
    GenerateFinanceReportUseCase,
    ReportContext,
    ReportGenerationError,
    SummarizeExpensesUseCase,
    SummarizeSalariesUseCase,
)
from studio_books.domain.records.engine import RecordView, SortSpec, compute_view
from studio_books.domain.services import BalanceSheetCalculator, ExpenseAnalyzer, FinanceReportCalculator
from studio_books.infrastructure.repositories.memory_repository import InMemoryLedgerRepository
from studio_books.infrastructure.repositories.workbook_repository import WorkbookLedgerRepository

__all__ = [
    "GenerateBalanceSheetUseCase",
    "GenerateFinanceReportUseCase",
    "SummarizeExpensesUseCase",
    "SummarizeSalariesUseCase",
    "ReportContext",
    "ReportGenerationError",
    "BalanceSheetCalculator",
    "FinanceReportCalculator",
    "ExpenseAnalyzer",
    "RecordView",
    "SortSpec",
    "compute_view",
    "InMemoryLedgerRepository",
    "WorkbookLedgerRepository",
]
