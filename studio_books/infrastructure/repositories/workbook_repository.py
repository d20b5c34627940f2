"""Excel-backed ledger repository.

The workbook holds one sheet per ledger, named after the store's tables. A
missing sheet reads as an empty ledger; any other read failure propagates.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence, TypeVar

import pandas as pd

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
from studio_books.domain.periods import DateWindow
from studio_books.domain.repositories import LedgerRepository
from studio_books.infrastructure.parsing.ledgers import (
    accounting_entries_from_frame,
    assignments_from_frame,
    closing_balances_from_frame,
    events_from_frame,
    expenses_from_frame,
    firms_from_frame,
    payments_from_frame,
    salary_payments_from_frame,
)
from studio_books.infrastructure.parsing.utils import clean_text, compute_file_hash, ensure_bytes, parse_decimal
from studio_books.infrastructure.repositories.memory_repository import scope_rows, select_accounting_entries

logger = logging.getLogger(__name__)

Row = TypeVar("Row")

FIRMS_SHEET = "firms"
PAYMENTS_SHEET = "payments"
EVENTS_SHEET = "events"
CLOSING_BALANCES_SHEET = "event_closing_balances"
EXPENSES_SHEET = "expenses"
STAFF_PAYMENTS_SHEET = "staff_payments"
FREELANCER_PAYMENTS_SHEET = "freelancer_payments"
STAFF_ASSIGNMENTS_SHEET = "staff_assignments"
FREELANCER_ASSIGNMENTS_SHEET = "freelancer_assignments"
ACCOUNTING_ENTRIES_SHEET = "accounting_entries"

LEDGER_SHEETS = (
    FIRMS_SHEET,
    PAYMENTS_SHEET,
    EVENTS_SHEET,
    CLOSING_BALANCES_SHEET,
    EXPENSES_SHEET,
    STAFF_PAYMENTS_SHEET,
    FREELANCER_PAYMENTS_SHEET,
    STAFF_ASSIGNMENTS_SHEET,
    FREELANCER_ASSIGNMENTS_SHEET,
    ACCOUNTING_ENTRIES_SHEET,
)


def _list_sheets(source: BytesIO) -> list[str]:
    xls = pd.ExcelFile(source, engine="openpyxl")
    return xls.sheet_names


def _pick_sheet(sheets: Sequence[str], preferred: str) -> str | None:
    if preferred in sheets:
        return preferred
    lower_map = {name.strip().lower(): name for name in sheets}
    return lower_map.get(preferred.lower())


class WorkbookLedgerRepository(LedgerRepository):
    def __init__(self, source: BytesIO | Path | bytes) -> None:
        self._source = ensure_bytes(source)
        self._sheets = _list_sheets(BytesIO(self._source))
        logger.debug(
            "Opened ledger workbook %s with sheets %s",
            compute_file_hash(self._source)[:12],
            self._sheets,
        )
        missing = [sheet for sheet in LEDGER_SHEETS if _pick_sheet(self._sheets, sheet) is None]
        if missing:
            logger.info("Workbook has no sheet for %s; those ledgers read as empty", ", ".join(missing))

    @property
    def sheet_names(self) -> list[str]:
        return list(self._sheets)

    def read_frame(self, sheet: str) -> pd.DataFrame:
        sheet_name = _pick_sheet(self._sheets, sheet)
        if sheet_name is None:
            logger.debug("Sheet %s not in workbook; treating ledger as empty", sheet)
            return pd.DataFrame()
        frame = pd.read_excel(
            BytesIO(self._source),
            sheet_name=sheet_name,
            engine="openpyxl",
            dtype=str,
        )
        frame.columns = [str(column).strip().lower() for column in frame.columns]
        return frame

    def _rows(self, sheet: str, parser: Callable[[pd.DataFrame], Sequence[Row]]) -> Sequence[Row]:
        return parser(self.read_frame(sheet))

    def get_firm(self, firm_id: str) -> Firm | None:
        firms = self._rows(FIRMS_SHEET, firms_from_frame)
        return next((firm for firm in firms if firm.id == firm_id), None)

    def list_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Payment]:
        rows = self._rows(PAYMENTS_SHEET, payments_from_frame)
        return scope_rows(rows, firm_id, window, lambda p: p.payment_date)

    def list_events(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Event]:
        rows = self._rows(EVENTS_SHEET, events_from_frame)
        return scope_rows(rows, firm_id, window, lambda e: e.event_date)

    def list_closing_balances(self, firm_id: str) -> Sequence[ClosingBalance]:
        return scope_rows(self._rows(CLOSING_BALANCES_SHEET, closing_balances_from_frame), firm_id)

    def list_expenses(self, firm_id: str, window: DateWindow | None = None) -> Sequence[Expense]:
        rows = self._rows(EXPENSES_SHEET, expenses_from_frame)
        return scope_rows(rows, firm_id, window, lambda e: e.expense_date)

    def list_staff_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[SalaryPayment]:
        rows = self._rows(STAFF_PAYMENTS_SHEET, salary_payments_from_frame)
        return scope_rows(rows, firm_id, window, lambda p: p.payment_date)

    def list_freelancer_payments(self, firm_id: str, window: DateWindow | None = None) -> Sequence[SalaryPayment]:
        rows = self._rows(FREELANCER_PAYMENTS_SHEET, salary_payments_from_frame)
        return scope_rows(rows, firm_id, window, lambda p: p.payment_date)

    def list_staff_assignments(self, firm_id: str) -> Sequence[Assignment]:
        return scope_rows(self._rows(STAFF_ASSIGNMENTS_SHEET, assignments_from_frame), firm_id)

    def list_freelancer_assignments(self, firm_id: str) -> Sequence[Assignment]:
        return scope_rows(self._rows(FREELANCER_ASSIGNMENTS_SHEET, assignments_from_frame), firm_id)

    def list_accounting_entries(
        self,
        firm_id: str,
        window: DateWindow | None = None,
        reflect_to_company: bool | None = None,
    ) -> Sequence[AccountingEntry]:
        rows = self._rows(ACCOUNTING_ENTRIES_SHEET, accounting_entries_from_frame)
        return select_accounting_entries(rows, firm_id, window, reflect_to_company)

    def ledger_records(self, sheet: str) -> list[dict[str, object]]:
        """Raw rows of one sheet as plain records for the list views."""
        frame = self.read_frame(sheet)
        if frame.empty:
            return []
        frame = frame.where(pd.notna(frame), None)
        records = frame.to_dict(orient="records")
        for record in records:
            for column, value in record.items():
                if "amount" in column and clean_text(value):
                    record[column] = float(parse_decimal(value))
        return records
