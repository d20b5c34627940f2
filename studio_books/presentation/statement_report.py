"""Tabular renderings of the financial statements."""
from __future__ import annotations

import csv
import html
import io
from datetime import date
from decimal import Decimal
from typing import Sequence, TypeVar

from studio_books.config import SETTINGS
from studio_books.domain.periods import time_range_label
from studio_books.domain.results import (
    BalanceSheetStatement,
    CashFlowEntry,
    ExpenseSummary,
    FinanceStatement,
)

T = TypeVar("T")

BALANCE_SHEET_HEADERS = ["Account", "Amount", "Total"]
PAYMENT_IN_HEADERS = ["Date", "Source/Event", "Amount", "Type"]
PAYMENT_OUT_HEADERS = ["Date", "Description", "Amount", "Type"]


def format_currency(amount: Decimal | int | float | None, symbol: str = SETTINGS.currency_symbol) -> str:
    value = Decimal(str(amount or 0))
    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{symbol}{text}"


def format_date(value: date | None) -> str:
    return value.strftime("%d %b %Y") if value else "N/A"


def balance_sheet_filename(today: date | None = None) -> str:
    return f"Balance Sheet {(today or date.today()).isoformat()}.pdf"


def finance_report_filename(time_range: str, today: date | None = None) -> str:
    label = time_range[:1].upper() + time_range[1:] if time_range else ""
    return f"Finance Report {label} {(today or date.today()).isoformat()}.pdf"


def paginate(rows: Sequence[T], per_page: int = SETTINGS.rows_per_page) -> list[list[T]]:
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    return [list(rows[start : start + per_page]) for start in range(0, len(rows), per_page)]


def balance_sheet_rows(statement: BalanceSheetStatement) -> list[list[str]]:
    assets = statement.assets
    liabilities = statement.liabilities
    equity = statement.equity
    return [
        ["ASSETS", "", ""],
        ["Current Assets:", "", ""],
        ["  Cash & Bank Balance", format_currency(assets.cash), ""],
        ["  Accounts Receivable (Pending Payments)", format_currency(assets.accounts_receivable), ""],
        ["  Other Assets (Accounting Entries)", format_currency(assets.other_assets), ""],
        ["TOTAL ASSETS", "", format_currency(assets.total_assets)],
        ["", "", ""],
        ["LIABILITIES", "", ""],
        ["Current Liabilities:", "", ""],
        ["  Expenses & Salary Payments", format_currency(liabilities.accounts_payable), ""],
        [
            "  Accounting Liabilities/Capital (Accounting Entries)",
            format_currency(liabilities.accounting_liabilities),
            "",
        ],
        ["TOTAL LIABILITIES", "", format_currency(liabilities.total_liabilities)],
        ["", "", ""],
        ["EQUITY", "", ""],
        ["  Retained Earnings (Net Profit)", format_currency(equity.retained_earnings), ""],
        ["TOTAL EQUITY", "", format_currency(equity.total_equity)],
        ["", "", ""],
        ["TOTAL LIABILITIES + EQUITY", "", format_currency(statement.liabilities_and_equity)],
    ]


def balance_check_rows(statement: BalanceSheetStatement, tolerance: Decimal = SETTINGS.balance_tolerance) -> list[list[str]]:
    return [
        ["Assets", format_currency(statement.assets.total_assets)],
        ["Liabilities + Equity", format_currency(statement.liabilities_and_equity)],
        ["Balance Status", statement.balance_status(tolerance)],
    ]


def finance_summary_rows(statement: FinanceStatement) -> list[list[str]]:
    return [
        ["Period", time_range_label(statement.time_range)],
        ["Total Revenue", format_currency(statement.payment_in_total)],
        ["Payments In", format_currency(statement.payment_in_total)],
        ["Payments Out", format_currency(statement.payment_out_total)],
        ["Net Profit", format_currency(statement.net_profit)],
        ["Cash In", format_currency(statement.cash_in)],
        ["Digital In", format_currency(statement.digital_in)],
        ["Cash Out", format_currency(statement.cash_out)],
        ["Digital Out", format_currency(statement.digital_out)],
    ]


def cash_flow_rows(entries: Sequence[CashFlowEntry]) -> list[list[str]]:
    return [
        [format_date(entry.date), entry.label or "N/A", format_currency(entry.amount), entry.type_label]
        for entry in entries
    ]


def expense_summary_rows(summary: ExpenseSummary) -> list[list[str]]:
    rows = [
        ["Total Expenses", format_currency(summary.total)],
        ["Cash", format_currency(summary.overall.cash)],
        ["Digital", format_currency(summary.overall.digital)],
        ["This Month", format_currency(summary.monthly_total)],
        ["This Year", format_currency(summary.yearly_total)],
        ["Average Expense", format_currency(summary.average)],
    ]
    for category, amount in summary.top_categories:
        rows.append([f"Top: {category}", format_currency(amount)])
    return rows


def rows_to_dicts(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[dict[str, str]]:
    return [dict(zip(headers, row)) for row in rows]


def render_csv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    if rows:
        writer.writerow(headers)
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_table_html(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    if not rows:
        return "<p>No entries.</p>"
    header = "".join(f"<th>{html.escape(col)}</th>" for col in headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{html.escape(str(value))}</td>" for value in row) + "</tr>" for row in rows
    )
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body}</tbody></table>"


def render_balance_sheet_html(statement: BalanceSheetStatement) -> str:
    return (
        "<h1>Balance Sheet</h1>"
        + render_table_html(BALANCE_SHEET_HEADERS, balance_sheet_rows(statement))
        + "<h2>Balance Check</h2>"
        + render_table_html(["Check", "Value"], balance_check_rows(statement))
    )


def render_finance_report_html(statement: FinanceStatement, per_page: int = SETTINGS.rows_per_page) -> str:
    parts = ["<h1>Financial Report</h1>", render_table_html(["Item", "Value"], finance_summary_rows(statement))]
    for title, headers, entries in (
        ("Payments In Details", PAYMENT_IN_HEADERS, statement.payment_in),
        ("Payments Out Details", PAYMENT_OUT_HEADERS, statement.payment_out),
    ):
        for number, page in enumerate(paginate(cash_flow_rows(entries), per_page), start=1):
            parts.append(f"<h2>{title} (page {number})</h2>")
            parts.append(render_table_html(headers, page))
    categories = statement.payment_out_categories()
    if categories:
        parts.append(f"<p>Expense Categories: {html.escape(', '.join(categories))}</p>")
    return "".join(parts)
