"""Domain models for the studio ledgers.

These dataclasses capture the canonical shape of the rows read from the
ledger store. Every row is scoped to a firm and treated as a read-only
snapshot for the duration of one report.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class EntryType(str, Enum):
    DEBIT = "Debit"
    CREDIT = "Credit"


@dataclass(frozen=True)
class Firm:
    id: str
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class Payment:
    """A client payment received against an event."""

    id: str
    firm_id: str
    amount: Decimal
    payment_date: date | None
    event_id: str | None = None
    payment_method: str | None = None


@dataclass(frozen=True)
class Event:
    """A booked event. The advance counts as money received when positive."""

    id: str
    firm_id: str
    title: str
    event_date: date | None
    total_amount: Decimal = Decimal("0")
    advance_amount: Decimal = Decimal("0")
    advance_payment_method: str | None = None


@dataclass(frozen=True)
class ClosingBalance:
    """Settlement adjustment recorded when an event is closed short."""

    event_id: str
    firm_id: str
    closing_amount: Decimal


@dataclass(frozen=True)
class Expense:
    id: str
    firm_id: str
    amount: Decimal
    expense_date: date | None
    category: str = ""
    description: str = ""
    payment_method: str | None = None


@dataclass(frozen=True)
class SalaryPayment:
    """Payout to a staff member or freelancer."""

    id: str
    firm_id: str
    amount: Decimal
    payment_date: date | None
    payment_method: str | None = None
    payee: str = ""


@dataclass(frozen=True)
class AccountingEntry:
    """Manual ledger entry; only reflected in the finance report when flagged."""

    id: str
    firm_id: str
    amount: Decimal
    entry_date: date | None
    entry_type: EntryType
    category: str = ""
    title: str = ""
    payment_method: str | None = None
    reflect_to_company: bool = False


@dataclass(frozen=True)
class Assignment:
    """Booking of a staff member or freelancer on an event, with the fee earned."""

    id: str
    firm_id: str
    payee: str
    amount: Decimal
    event_id: str | None = None
    status: str = ""
