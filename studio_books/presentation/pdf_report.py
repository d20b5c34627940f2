"""PDF documents for the financial statements, built with reportlab."""
from __future__ import annotations

import io
from datetime import date
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from studio_books.config import SETTINGS
from studio_books.domain.models import Firm
from studio_books.domain.results import BalanceSheetStatement, FinanceStatement
from studio_books.presentation.statement_report import (
    BALANCE_SHEET_HEADERS,
    PAYMENT_IN_HEADERS,
    PAYMENT_OUT_HEADERS,
    balance_check_rows,
    balance_sheet_rows,
    cash_flow_rows,
    finance_summary_rows,
    format_date,
    paginate,
)

# Helvetica has no rupee glyph
PDF_CURRENCY = "Rs. "

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0f172a")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#cbd5e1")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
)


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("Title", parent=base["Heading1"], fontSize=20, textColor=colors.HexColor("#0f172a")),
        "section": ParagraphStyle("Section", parent=base["Heading2"], fontSize=12),
        "body": ParagraphStyle("Body", parent=base["Normal"], fontSize=10),
        "muted": ParagraphStyle("Muted", parent=base["Normal"], fontSize=9, textColor=colors.HexColor("#64748b")),
    }


def _pdf_text(rows: Sequence[Sequence[str]]) -> list[list[str]]:
    return [[cell.replace(SETTINGS.currency_symbol, PDF_CURRENCY) for cell in row] for row in rows]


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Table:
    table = Table([list(headers)] + _pdf_text(rows), repeatRows=1)
    table.setStyle(_TABLE_STYLE)
    return table


def _header(elements: list, firm: Firm | None, styles: dict[str, ParagraphStyle]) -> None:
    if firm is None:
        return
    elements.append(Paragraph(f"<b>{escape(firm.name)}</b>", styles["body"]))
    details = " | ".join(part for part in (firm.address, firm.phone, firm.email) if part)
    if details:
        elements.append(Paragraph(escape(details), styles["muted"]))
    elements.append(Spacer(1, 12))


def _build(elements: list) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=0.5 * inch, bottomMargin=0.5 * inch)
    doc.build(elements)
    return buffer.getvalue()


def render_balance_sheet_pdf(statement: BalanceSheetStatement, firm: Firm | None = None, today: date | None = None) -> bytes:
    styles = _styles()
    elements: list = []
    _header(elements, firm, styles)
    elements.append(Paragraph("Balance Sheet", styles["title"]))
    elements.append(Paragraph(f"Date: {format_date(today or date.today())}", styles["muted"]))
    elements.append(Spacer(1, 12))
    elements.append(_table(BALANCE_SHEET_HEADERS, balance_sheet_rows(statement)))
    elements.append(Spacer(1, 12))
    elements.append(Paragraph("Balance Check", styles["section"]))
    elements.append(_table(["Check", "Value"], balance_check_rows(statement)))
    return _build(elements)


def render_finance_report_pdf(
    statement: FinanceStatement,
    firm: Firm | None = None,
    today: date | None = None,
    per_page: int = SETTINGS.rows_per_page,
) -> bytes:
    styles = _styles()
    elements: list = []
    _header(elements, firm, styles)
    elements.append(Paragraph("Financial Report", styles["title"]))
    elements.append(Paragraph(f"Generated: {format_date(today or date.today())}", styles["muted"]))
    elements.append(Spacer(1, 12))
    elements.append(_table(["Item", "Value"], finance_summary_rows(statement)))

    sections = (
        ("Payments In Details", PAYMENT_IN_HEADERS, cash_flow_rows(statement.payment_in)),
        ("Payments Out Details", PAYMENT_OUT_HEADERS, cash_flow_rows(statement.payment_out)),
    )
    for title, headers, rows in sections:
        for page in paginate(rows, per_page):
            elements.append(PageBreak())
            elements.append(Paragraph(title, styles["title"]))
            elements.append(_table(headers, page))

    categories = statement.payment_out_categories()
    if categories:
        elements.append(Spacer(1, 12))
        elements.append(Paragraph("Payment Breakdown", styles["section"]))
        elements.append(Paragraph(f"Expense Categories: {escape(', '.join(categories))}", styles["body"]))
    return _build(elements)
