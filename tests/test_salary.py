from datetime import date
from decimal import Decimal

from studio_books.application.use_cases import ReportContext, SummarizeSalariesUseCase
from studio_books.domain.models import Assignment, SalaryPayment
from studio_books.domain.records.engine import compute_view
from studio_books.domain.salary import summarize_salaries
from studio_books.infrastructure.repositories.memory_repository import InMemoryLedgerRepository
from studio_books.infrastructure.repositories.workbook_repository import WorkbookLedgerRepository

FIRM = "firm-1"


def assignment(id, payee, amount, status=""):
    return Assignment(id=id, firm_id=FIRM, payee=payee, amount=Decimal(amount), status=status)


def payment(id, payee, amount):
    return SalaryPayment(id=id, firm_id=FIRM, amount=Decimal(amount), payment_date=date(2024, 5, 1), payee=payee)


def test_summaries_group_by_payee_in_first_seen_order():
    summaries = summarize_salaries(
        [
            assignment("t1", "Ravi", "12000", "Completed"),
            assignment("t2", "Anita", "3000"),
            assignment("t3", " ravi", "9000", "pending"),
        ],
        [payment("s1", "Ravi", "5000"), payment("s2", "Kiran", "700"), payment("s3", "", "10")],
    )

    assert [s.payee for s in summaries] == ["Ravi", "Anita", "Kiran"]
    ravi = summaries[0]
    assert ravi.total_earnings == Decimal("21000")
    assert ravi.paid_amount == Decimal("5000")
    assert ravi.pending_amount == Decimal("16000")
    assert (ravi.total_assignments, ravi.total_tasks, ravi.completed_tasks) == (2, 2, 1)
    kiran = summaries[2]
    assert kiran.total_assignments == 0
    assert kiran.pending_amount == Decimal("0")


def test_summary_records_drive_composite_filters():
    records = [
        s.as_record()
        for s in summarize_salaries(
            [
                assignment("t1", "Ravi", "20000", "done"),
                assignment("t2", "Ravi", "15000", "done"),
                assignment("t3", "Anita", "4000"),
            ],
            [payment("s1", "Ravi", "35000"), payment("s2", "Anita", "1000"), payment("s3", "Kiran", "500")],
        )
    ]

    def names(filters):
        return [r["name"] for r in compute_view(records, "", ["name"], None, filters)]

    assert names({"payment_status": "fully_paid"}) == ["Ravi"]
    assert names({"payment_status": "partial_paid"}) == ["Anita"]
    assert names({"payment_status": "overpaid"}) == ["Kiran"]
    assert names({"earning_range": "25k_75k"}) == ["Ravi"]
    assert names({"assignment_count": "1_3"}) == ["Ravi", "Anita"]
    assert names({"task_completion": "all_completed"}) == ["Ravi"]
    assert names({"task_completion": "no_tasks"}) == ["Kiran"]


def test_use_case_summarizes_staff_and_freelancers_separately():
    repository = InMemoryLedgerRepository(
        staff_payments=[payment("s1", "Ravi", "2000")],
        freelancer_payments=[payment("f1", "Anita", "800")],
        staff_assignments=[
            assignment("t1", "Ravi", "2500", "done"),
            Assignment(id="t9", firm_id="firm-2", payee="Ravi", amount=Decimal("99999")),
        ],
        freelancer_assignments=[assignment("t2", "Anita", "800", "done")],
    )

    response = SummarizeSalariesUseCase(ReportContext(repository=repository)).execute(FIRM)

    assert [(s.payee, s.total_earnings, s.paid_amount) for s in response.staff] == [("Ravi", Decimal("2500"), Decimal("2000"))]
    assert [(s.payee, s.pending_amount) for s in response.freelancers] == [("Anita", Decimal("0"))]
    assert response.firm is None


def test_workbook_assignments_feed_the_summary(ledger_workbook):
    repository = WorkbookLedgerRepository(ledger_workbook)

    assignments = repository.list_staff_assignments(FIRM)
    response = SummarizeSalariesUseCase(ReportContext(repository=repository)).execute(FIRM)

    assert [a.id for a in assignments] == ["t1", "t2"]
    assert assignments[1].amount == Decimal("9000")
    assert repository.list_freelancer_assignments(FIRM) == []
    ravi = response.staff[0]
    assert ravi.payee == "Ravi"
    assert ravi.total_earnings == Decimal("21000")
    assert ravi.paid_amount == Decimal("50")
    assert ravi.completed_tasks == 1
