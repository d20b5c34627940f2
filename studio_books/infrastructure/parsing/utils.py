"""Shared parsing utilities for ledger ingestion."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path
import hashlib

import pandas as pd

_TRUE_VALUES = {"true", "yes", "y", "1", "t"}


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, (Path, str)):
        return Path(source).read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def compute_file_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def clean_text(value: object) -> str:
    if value is None:
        return ""
    s = str(value).strip()
    if s.upper() in ("NAN", "NONE", "NAT"):
        return ""
    return s


def optional_text(value: object) -> str | None:
    return clean_text(value) or None


def parse_decimal(value: object) -> Decimal:
    s = clean_text(value)
    if not s:
        return Decimal("0")
    negative = False
    if s.startswith("(") and s.endswith(")"):
        negative = True
        s = s[1:-1]
    for ch in [",", "₹", "$", "€", "£", " "]:
        s = s.replace(ch, "")
    try:
        result = Decimal(s)
    except InvalidOperation:
        return Decimal("0")
    if negative:
        result = -result
    return result


def parse_date(value: object) -> date | None:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = clean_text(value)
    if not s:
        return None
    parsed = pd.to_datetime(s, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return clean_text(value).lower() in _TRUE_VALUES
