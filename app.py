"""Streamlit front-end for the studio ledger reports."""
from __future__ import annotations

from datetime import date
from io import BytesIO

import pandas as pd
import streamlit as st

from studio_books import (
    GenerateBalanceSheetUseCase,
    GenerateFinanceReportUseCase,
    RecordView,
    ReportContext,
    ReportGenerationError,
    SummarizeExpensesUseCase,
    SummarizeSalariesUseCase,
    WorkbookLedgerRepository,
)
from studio_books.application.dto import FinanceReportRequest
from studio_books.domain.periods import TimeRange, time_range_label
from studio_books.domain.records.predicates import (
    FREELANCER_ASSIGNMENT_COUNTS,
    FREELANCER_EARNING_RANGES,
    PAYMENT_STATUSES,
    STAFF_ASSIGNMENT_COUNTS,
    STAFF_EARNING_RANGES,
    TASK_COMPLETIONS,
)
from studio_books.infrastructure.repositories.workbook_repository import (
    EVENTS_SHEET,
    EXPENSES_SHEET,
    FREELANCER_PAYMENTS_SHEET,
    PAYMENTS_SHEET,
    STAFF_PAYMENTS_SHEET,
)
from studio_books.presentation.pdf_report import render_balance_sheet_pdf, render_finance_report_pdf
from studio_books.presentation.statement_report import (
    BALANCE_SHEET_HEADERS,
    PAYMENT_IN_HEADERS,
    PAYMENT_OUT_HEADERS,
    balance_sheet_filename,
    balance_sheet_rows,
    cash_flow_rows,
    expense_summary_rows,
    finance_report_filename,
    format_currency,
    render_balance_sheet_html,
    render_csv,
    render_finance_report_html,
    rows_to_dicts,
)


st.set_page_config(page_title="Studio Books", layout="wide")
st.title("Studio Books")

EXPLORER_SHEETS = {
    "Payments": (PAYMENTS_SHEET, ["event_id", "payment_method"], "payment_date"),
    "Events": (EVENTS_SHEET, ["title", "event_type", "venue"], "event_date"),
    "Expenses": (EXPENSES_SHEET, ["description", "category"], "expense_date"),
    "Staff payments": (STAFF_PAYMENTS_SHEET, ["payee", "staff_name", "description"], "payment_date"),
    "Freelancer payments": (FREELANCER_PAYMENTS_SHEET, ["payee", "freelancer_name", "description"], "payment_date"),
}

# label -> (summary attribute, earning bands, assignment bands)
SALARY_VIEWS = {
    "Staff salaries": ("staff", STAFF_EARNING_RANGES, STAFF_ASSIGNMENT_COUNTS),
    "Freelancer salaries": ("freelancers", FREELANCER_EARNING_RANGES, FREELANCER_ASSIGNMENT_COUNTS),
}


def load_repository(workbook_bytes: bytes) -> WorkbookLedgerRepository:
    return WorkbookLedgerRepository(BytesIO(workbook_bytes))


def get_view(name: str, records: list[dict], search_fields: list[str], default_sort: str) -> RecordView:
    views: dict[str, RecordView] = st.session_state.setdefault("views", {})
    view = views.get(name)
    if view is None:
        view = RecordView(records, search_fields, default_sort)
        views[name] = view
    else:
        view.set_data(records)
    return view


with st.sidebar:
    workbook_file = st.file_uploader("Upload ledger workbook", type=["xlsx"])
    firm_id = st.text_input("Firm id")
    time_range = st.selectbox(
        "Finance report period",
        [t.value for t in TimeRange],
        index=[t.value for t in TimeRange].index(TimeRange.GLOBAL.value),
        format_func=time_range_label,
    )
    custom_start = st.date_input("Custom start", value=date.today()) if time_range == TimeRange.CUSTOM.value else None

if not (workbook_file and firm_id):
    st.info("Upload a workbook and enter a firm id to build the reports.")
    st.stop()

repository = load_repository(workbook_file.getvalue())
context = ReportContext(repository=repository)

try:
    with st.spinner("Building reports..."):
        balance = GenerateBalanceSheetUseCase(context).execute(firm_id)
        finance = GenerateFinanceReportUseCase(context).execute(
            FinanceReportRequest(firm_id=firm_id, time_range=time_range, custom_start=custom_start)
        )
        expenses = SummarizeExpensesUseCase(context).execute(firm_id)
        salaries = SummarizeSalariesUseCase(context).execute(firm_id)
except ReportGenerationError as exc:
    st.error(f"Report generation failed: {exc}")
    st.stop()

if balance.firm:
    st.caption(f"{balance.firm.name} · {balance.firm.address}")

tabs = st.tabs(["Balance Sheet", "Finance Report", "Expenses", "Ledger Explorer"])

with tabs[0]:
    sheet = balance.statement
    col1, col2, col3 = st.columns(3)
    col1.metric("Total assets", format_currency(sheet.assets.total_assets))
    col2.metric("Total liabilities", format_currency(sheet.liabilities.total_liabilities))
    col3.metric("Equity", format_currency(sheet.equity.total_equity))
    st.write(f"Balance status: **{sheet.balance_status()}**")
    rows = balance_sheet_rows(sheet)
    st.dataframe(pd.DataFrame(rows_to_dicts(BALANCE_SHEET_HEADERS, rows)), hide_index=True)
    st.download_button(
        "Download CSV",
        data=render_csv(BALANCE_SHEET_HEADERS, rows),
        file_name="balance_sheet.csv",
        mime="text/csv",
    )
    st.download_button(
        "Download HTML",
        data=render_balance_sheet_html(sheet).encode("utf-8"),
        file_name="balance_sheet.html",
        mime="text/html",
    )
    st.download_button(
        "Download PDF",
        data=render_balance_sheet_pdf(sheet, balance.firm),
        file_name=balance_sheet_filename(),
        mime="application/pdf",
    )

with tabs[1]:
    report = finance.statement
    st.subheader(f"Period: {time_range_label(report.time_range)}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Payments in", format_currency(report.payment_in_total))
    col2.metric("Payments out", format_currency(report.payment_out_total))
    col3.metric("Net profit", format_currency(report.net_profit))
    col4, col5, col6, col7 = st.columns(4)
    col4.metric("Cash in", format_currency(report.cash_in))
    col5.metric("Digital in", format_currency(report.digital_in))
    col6.metric("Cash out", format_currency(report.cash_out))
    col7.metric("Digital out", format_currency(report.digital_out))

    in_rows = cash_flow_rows(report.payment_in)
    out_rows = cash_flow_rows(report.payment_out)
    st.markdown("**Payments in**")
    st.dataframe(pd.DataFrame(rows_to_dicts(PAYMENT_IN_HEADERS, in_rows)), hide_index=True)
    st.markdown("**Payments out**")
    st.dataframe(pd.DataFrame(rows_to_dicts(PAYMENT_OUT_HEADERS, out_rows)), hide_index=True)
    categories = report.payment_out_categories()
    if categories:
        st.caption("Expense categories: " + ", ".join(categories))

    st.download_button(
        "Download HTML",
        data=render_finance_report_html(report).encode("utf-8"),
        file_name="finance_report.html",
        mime="text/html",
    )
    st.download_button(
        "Download PDF",
        data=render_finance_report_pdf(report, finance.firm),
        file_name=finance_report_filename(report.time_range),
        mime="application/pdf",
    )

with tabs[2]:
    summary_rows = expense_summary_rows(expenses.summary)
    st.dataframe(pd.DataFrame(rows_to_dicts(["Item", "Value"], summary_rows)), hide_index=True)

with tabs[3]:
    label = st.selectbox("Ledger", [*EXPLORER_SHEETS, *SALARY_VIEWS])
    if label in SALARY_VIEWS:
        attribute, earning_ranges, assignment_counts = SALARY_VIEWS[label]
        records = [summary.as_record() for summary in getattr(salaries, attribute)]
        view = get_view(label, records, ["name"], "name")
    else:
        sheet_name, search_fields, default_sort = EXPLORER_SHEETS[label]
        records = [r for r in repository.ledger_records(sheet_name) if r.get("firm_id") == firm_id]
        view = get_view(label, records, search_fields, default_sort)

    columns = sorted({key for record in records for key in record})
    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        search = st.text_input("Search", value=view.search_value, key=f"search_{label}")
        if search != view.search_value:
            view.set_search_value(search)
    with col2:
        if columns:
            current = view.current_sort if view.current_sort in columns else columns[0]
            sort_key = st.selectbox("Sort by", columns, index=columns.index(current), key=f"sort_{label}")
            if sort_key != view.current_sort:
                view.handle_sort_change(sort_key)
    with col3:
        if st.button(f"Direction: {view.sort_direction}", key=f"dir_{label}"):
            view.handle_sort_direction_toggle()
            st.rerun()

    with st.expander("Filters"):
        filters: dict[str, object] = {}
        if label == "Events":
            filters["event_type"] = st.text_input("Event type", key="filter_event_type")
        if label in SALARY_VIEWS:
            filters["payment_status"] = st.selectbox("Payment status", ["", *PAYMENT_STATUSES], key=f"status_{label}")
            filters["earning_range"] = st.selectbox("Earnings", ["", *earning_ranges], key=f"earnings_{label}")
            filters["assignment_count"] = st.selectbox("Assignments", ["", *assignment_counts], key=f"assignments_{label}")
            filters["task_completion"] = st.selectbox("Tasks", ["", *TASK_COMPLETIONS], key=f"tasks_{label}")
        if "payment_method" in columns:
            filters["payment_method"] = st.text_input("Payment method", key=f"method_{label}")
        if "category" in columns:
            filters["category"] = st.text_input("Category", key=f"category_{label}")
        if filters != view.active_filters:
            view.handle_filter_change(filters)

    visible = view.filtered_and_sorted_data
    st.caption(f"Total {len(records)} rows; showing {len(visible)}")
    st.dataframe(pd.DataFrame(visible), hide_index=True, use_container_width=True)
