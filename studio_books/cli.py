"""Command-line entrypoint for studio ledger reports."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from studio_books.application.archive.use_cases import ArchiveReportUseCase
from studio_books.application.dto import FinanceReportRequest
from studio_books.application.use_cases import (
    GenerateBalanceSheetUseCase,
    GenerateFinanceReportUseCase,
    ReportContext,
    ReportGenerationError,
    SummarizeExpensesUseCase,
)
from studio_books.config import SETTINGS
from studio_books.domain.archive.entities import ReportArchiveRequest, ReportArtifact
from studio_books.domain.periods import TimeRange, time_range_label
from studio_books.infrastructure.archive.file_repository import FileSystemReportArchive
from studio_books.infrastructure.repositories.workbook_repository import WorkbookLedgerRepository
from studio_books.presentation.pdf_report import render_balance_sheet_pdf, render_finance_report_pdf
from studio_books.presentation.statement_report import (
    BALANCE_SHEET_HEADERS,
    PAYMENT_IN_HEADERS,
    PAYMENT_OUT_HEADERS,
    balance_check_rows,
    balance_sheet_filename,
    balance_sheet_rows,
    cash_flow_rows,
    expense_summary_rows,
    finance_report_filename,
    finance_summary_rows,
    render_csv,
)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate studio ledger reports from a workbook export")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser, with_pdf: bool = True) -> None:
        p.add_argument("workbook", type=str, help="Path to the ledger workbook (.xlsx)")
        p.add_argument("--firm", required=True, help="Firm id to report on")
        if with_pdf:
            p.add_argument("--pdf", type=str, help="Write the PDF document to this path")
        p.add_argument(
            "--archive",
            nargs="?",
            const=str(SETTINGS.export_dir),
            help="Archive generated artifacts under this directory (default: the export directory)",
        )

    add_common(sub.add_parser("balance-sheet", help="Assets, liabilities and equity"))

    finance = sub.add_parser("finance-report", help="Payments in/out for a period")
    add_common(finance)
    finance.add_argument("--range", dest="time_range", default=TimeRange.GLOBAL.value, choices=[t.value for t in TimeRange])
    finance.add_argument("--start", type=date.fromisoformat, help="Custom range start date (YYYY-MM-DD)")

    add_common(sub.add_parser("expenses", help="Expense statistics"), with_pdf=False)
    return parser.parse_args(argv)


def _print_rows(rows: list[list[str]]) -> None:
    width = max((len(row[0]) for row in rows), default=0)
    for row in rows:
        print(f"{row[0]:<{width}}  " + "  ".join(cell for cell in row[1:] if cell))


def _archive(
    root: str,
    firm_id: str,
    report: str,
    artifacts: list[ReportArtifact],
    metadata: dict[str, str],
) -> None:
    use_case = ArchiveReportUseCase(repository=FileSystemReportArchive(Path(root)))
    receipt = use_case.execute(
        ReportArchiveRequest(
            run_id=datetime.now().strftime("%Y%m%d_%H%M%S"),
            firm_id=firm_id,
            report=report,
            artifacts=artifacts,
            metadata=metadata,
        )
    )
    print(f"\nArchived to {receipt.location}")


def run_balance_sheet(args: argparse.Namespace, context: ReportContext) -> int:
    response = GenerateBalanceSheetUseCase(context).execute(args.firm)
    statement = response.statement
    rows = balance_sheet_rows(statement)

    print("Balance Sheet")
    print("=============")
    _print_rows(rows)
    print()
    _print_rows(balance_check_rows(statement, SETTINGS.balance_tolerance))

    artifacts = [ReportArtifact(name="balance_sheet.csv", content=render_csv(BALANCE_SHEET_HEADERS, rows))]
    if args.pdf or args.archive:
        pdf_bytes = render_balance_sheet_pdf(statement, response.firm)
        artifacts.append(ReportArtifact(name=balance_sheet_filename(), content=pdf_bytes))
        if args.pdf:
            Path(args.pdf).write_bytes(pdf_bytes)
            print(f"\nWrote {args.pdf}")
    if args.archive:
        metadata = {
            "total_assets": str(statement.assets.total_assets),
            "total_liabilities": str(statement.liabilities.total_liabilities),
            "total_equity": str(statement.equity.total_equity),
            "balance_status": statement.balance_status(SETTINGS.balance_tolerance),
        }
        _archive(args.archive, args.firm, "balance_sheet", artifacts, metadata)
    return 0


def run_finance_report(args: argparse.Namespace, context: ReportContext) -> int:
    request = FinanceReportRequest(
        firm_id=args.firm,
        time_range=args.time_range,
        custom_start=args.start,
    )
    response = GenerateFinanceReportUseCase(context).execute(request)
    statement = response.statement

    print(f"Financial Report ({time_range_label(statement.time_range)})")
    print("================")
    _print_rows(finance_summary_rows(statement))

    in_rows = cash_flow_rows(statement.payment_in)
    out_rows = cash_flow_rows(statement.payment_out)
    if in_rows:
        print("\nPayments In:")
        for row in in_rows[: SETTINGS.rows_per_page]:
            print("- " + " | ".join(row))
    if out_rows:
        print("\nPayments Out:")
        for row in out_rows[: SETTINGS.rows_per_page]:
            print("- " + " | ".join(row))

    artifacts = [
        ReportArtifact(name="payments_in.csv", content=render_csv(PAYMENT_IN_HEADERS, in_rows)),
        ReportArtifact(name="payments_out.csv", content=render_csv(PAYMENT_OUT_HEADERS, out_rows)),
    ]
    if args.pdf or args.archive:
        pdf_bytes = render_finance_report_pdf(statement, response.firm)
        artifacts.append(ReportArtifact(name=finance_report_filename(statement.time_range), content=pdf_bytes))
        if args.pdf:
            Path(args.pdf).write_bytes(pdf_bytes)
            print(f"\nWrote {args.pdf}")
    if args.archive:
        metadata = {
            "time_range": statement.time_range,
            "payment_in_total": str(statement.payment_in_total),
            "payment_out_total": str(statement.payment_out_total),
            "net_profit": str(statement.net_profit),
        }
        if statement.window is not None:
            metadata["window_start"] = statement.window.start.isoformat()
            metadata["window_end"] = statement.window.end.isoformat()
        _archive(args.archive, args.firm, "finance_report", artifacts, metadata)
    return 0


def run_expenses(args: argparse.Namespace, context: ReportContext) -> int:
    response = SummarizeExpensesUseCase(context).execute(args.firm)
    rows = expense_summary_rows(response.summary)
    print("Expense Summary")
    print("===============")
    _print_rows(rows)
    if args.archive:
        _archive(
            args.archive,
            args.firm,
            "expenses",
            [ReportArtifact(name="expense_summary.csv", content=render_csv(["Item", "Value"], rows))],
            {"total": str(response.summary.total), "count": str(response.summary.count)},
        )
    return 0


COMMANDS = {
    "balance-sheet": run_balance_sheet,
    "finance-report": run_finance_report,
    "expenses": run_expenses,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    context = ReportContext(repository=WorkbookLedgerRepository(Path(args.workbook)))
    try:
        return COMMANDS[args.command](args, context)
    except ReportGenerationError as exc:
        print(f"Report generation failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
