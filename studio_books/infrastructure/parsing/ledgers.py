"""Ledger sheet parsers producing canonical domain rows."""
from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from studio_books.domain.models import (
    AccountingEntry,
    Assignment,
    ClosingBalance,
    EntryType,
    Event,
    Expense,
    Firm,
    Payment,
    SalaryPayment,
)
from studio_books.infrastructure.parsing.utils import (
    clean_text,
    optional_text,
    parse_bool,
    parse_date,
    parse_decimal,
)

logger = logging.getLogger(__name__)

PAYEE_COLUMNS = ["payee", "staff_name", "freelancer_name", "name"]


def _get(row: pd.Series, *columns: str) -> object:
    for column in columns:
        if column in row.index:
            value = row[column]
            if clean_text(value):
                return value
    return None


def _row_id(row: pd.Series, idx: object) -> str:
    return clean_text(row.get("id")) or f"row-{idx}"


def parse_entry_type(value: object) -> EntryType | None:
    text = clean_text(value).lower()
    for entry_type in EntryType:
        if entry_type.value.lower() == text:
            return entry_type
    return None


def firms_from_frame(df: pd.DataFrame) -> Sequence[Firm]:
    firms: list[Firm] = []
    for idx, row in df.iterrows():
        firm_id = clean_text(row.get("id"))
        if not firm_id:
            continue
        firms.append(
            Firm(
                id=firm_id,
                name=clean_text(row.get("name")),
                address=clean_text(row.get("address")),
                phone=clean_text(row.get("phone")),
                email=clean_text(row.get("email")),
            )
        )
    return firms


def payments_from_frame(df: pd.DataFrame) -> Sequence[Payment]:
    return [
        Payment(
            id=_row_id(row, idx),
            firm_id=clean_text(row.get("firm_id")),
            amount=parse_decimal(row.get("amount")),
            payment_date=parse_date(row.get("payment_date")),
            event_id=optional_text(row.get("event_id")),
            payment_method=optional_text(row.get("payment_method")),
        )
        for idx, row in df.iterrows()
    ]


def events_from_frame(df: pd.DataFrame) -> Sequence[Event]:
    return [
        Event(
            id=_row_id(row, idx),
            firm_id=clean_text(row.get("firm_id")),
            title=clean_text(row.get("title")),
            event_date=parse_date(row.get("event_date")),
            total_amount=parse_decimal(row.get("total_amount")),
            advance_amount=parse_decimal(row.get("advance_amount")),
            advance_payment_method=optional_text(row.get("advance_payment_method")),
        )
        for idx, row in df.iterrows()
    ]


def closing_balances_from_frame(df: pd.DataFrame) -> Sequence[ClosingBalance]:
    balances: list[ClosingBalance] = []
    for _, row in df.iterrows():
        event_id = clean_text(row.get("event_id"))
        if not event_id:
            continue
        balances.append(
            ClosingBalance(
                event_id=event_id,
                firm_id=clean_text(row.get("firm_id")),
                closing_amount=parse_decimal(row.get("closing_amount")),
            )
        )
    return balances


def expenses_from_frame(df: pd.DataFrame) -> Sequence[Expense]:
    return [
        Expense(
            id=_row_id(row, idx),
            firm_id=clean_text(row.get("firm_id")),
            amount=parse_decimal(row.get("amount")),
            expense_date=parse_date(row.get("expense_date")),
            category=clean_text(row.get("category")),
            description=clean_text(row.get("description")),
            payment_method=optional_text(row.get("payment_method")),
        )
        for idx, row in df.iterrows()
    ]


def salary_payments_from_frame(df: pd.DataFrame) -> Sequence[SalaryPayment]:
    return [
        SalaryPayment(
            id=_row_id(row, idx),
            firm_id=clean_text(row.get("firm_id")),
            amount=parse_decimal(row.get("amount")),
            payment_date=parse_date(row.get("payment_date")),
            payment_method=optional_text(row.get("payment_method")),
            payee=clean_text(_get(row, *PAYEE_COLUMNS)),
        )
        for idx, row in df.iterrows()
    ]


def assignments_from_frame(df: pd.DataFrame) -> Sequence[Assignment]:
    return [
        Assignment(
            id=_row_id(row, idx),
            firm_id=clean_text(row.get("firm_id")),
            payee=clean_text(_get(row, *PAYEE_COLUMNS)),
            amount=parse_decimal(_get(row, "amount", "fee", "rate")),
            event_id=optional_text(row.get("event_id")),
            status=clean_text(row.get("status")),
        )
        for idx, row in df.iterrows()
    ]


def accounting_entries_from_frame(df: pd.DataFrame) -> Sequence[AccountingEntry]:
    entries: list[AccountingEntry] = []
    for idx, row in df.iterrows():
        entry_type = parse_entry_type(row.get("entry_type"))
        if entry_type is None:
            logger.warning("Skipping accounting entry %s with entry_type %r", _row_id(row, idx), row.get("entry_type"))
            continue
        entries.append(
            AccountingEntry(
                id=_row_id(row, idx),
                firm_id=clean_text(row.get("firm_id")),
                amount=parse_decimal(row.get("amount")),
                entry_date=parse_date(row.get("entry_date")),
                entry_type=entry_type,
                category=clean_text(row.get("category")),
                title=clean_text(row.get("title")),
                payment_method=optional_text(row.get("payment_method")),
                reflect_to_company=parse_bool(row.get("reflect_to_company")),
            )
        )
    return entries
