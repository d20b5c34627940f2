from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

FIRM = "firm-1"


def ledger_frames() -> dict[str, pd.DataFrame]:
    return {
        "firms": pd.DataFrame(
            [{"id": FIRM, "name": "Lens & Light Studio", "address": "MG Road", "phone": "98450 00000", "email": "hi@lenslight.in"}]
        ),
        "payments": pd.DataFrame(
            [
                {"id": "p1", "firm_id": FIRM, "amount": 500, "payment_date": datetime(2024, 5, 10), "event_id": None, "payment_method": "Cash"},
                {"id": "p2", "firm_id": "firm-2", "amount": 9000, "payment_date": datetime(2024, 5, 10), "event_id": None, "payment_method": "UPI"},
            ]
        ),
        "events": pd.DataFrame(
            [
                {
                    "id": "e1",
                    "firm_id": FIRM,
                    "title": "Sharma Wedding",
                    "event_type": "Wedding",
                    "event_date": datetime(2024, 5, 1),
                    "total_amount": 100,
                    "advance_amount": 100,
                    "advance_payment_method": "UPI",
                }
            ]
        ),
        "Expenses": pd.DataFrame(
            [
                {"id": "x1", "firm_id": FIRM, "amount": "1,50", "expense_date": "2024-05-02", "category": "Travel", "description": "Fuel", "payment_method": "Cash"},
                {"id": "x2", "firm_id": FIRM, "amount": 50, "expense_date": "2024-05-03", "category": "Food", "description": "Lunch", "payment_method": "UPI"},
            ]
        ),
        "staff_payments": pd.DataFrame(
            [{"id": "s1", "firm_id": FIRM, "amount": 50, "payment_date": datetime(2024, 5, 4), "staff_name": "Ravi", "payment_method": "Cash"}]
        ),
        "staff_assignments": pd.DataFrame(
            [
                {"id": "t1", "firm_id": FIRM, "staff_name": "Ravi", "amount": 12000, "event_id": "e1", "status": "Completed"},
                {"id": "t2", "firm_id": FIRM, "staff_name": "ravi ", "amount": "9,000", "event_id": "e1", "status": "pending"},
                {"id": "t3", "firm_id": "firm-2", "staff_name": "Meera", "amount": 4000, "event_id": None, "status": "done"},
            ]
        ),
        "accounting_entries": pd.DataFrame(
            [
                {"id": "a1", "firm_id": FIRM, "amount": 30, "entry_date": datetime(2024, 5, 5), "entry_type": "Credit", "category": "Capital", "title": "Owner", "reflect_to_company": True},
                {"id": "a2", "firm_id": FIRM, "amount": 20, "entry_date": datetime(2024, 5, 6), "entry_type": "debit", "category": "Office", "title": "Desk", "reflect_to_company": False},
                {"id": "a3", "firm_id": FIRM, "amount": 5, "entry_date": datetime(2024, 5, 6), "entry_type": "Transfer", "category": "?", "title": "?", "reflect_to_company": False},
            ]
        ),
    }


@pytest.fixture
def ledger_workbook(tmp_path: Path) -> Path:
    path = tmp_path / "ledgers.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, frame in ledger_frames().items():
            frame.to_excel(writer, sheet_name=sheet, index=False)
    return path
