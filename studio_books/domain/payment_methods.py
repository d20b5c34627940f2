"""Binary cash/digital bucketing of free-text payment methods."""
from __future__ import annotations

import re

CASH = "Cash"
DIGITAL = "Digital"

_CASH_PATTERN = re.compile(r"\bcash\b", re.IGNORECASE)


def parse_payment_method(raw: object) -> str:
    """Normalize a stored payment method to exactly ``Cash`` or ``Digital``.

    Anything not recognized as cash (UPI, bank transfer, cheque, blank) is digital.
    """
    if raw is None:
        return DIGITAL
    text = str(raw).strip()
    if _CASH_PATTERN.search(text):
        return CASH
    return DIGITAL


def is_cash(raw: object) -> bool:
    return parse_payment_method(raw) == CASH
