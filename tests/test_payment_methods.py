import pytest

from studio_books.domain.payment_methods import CASH, DIGITAL, is_cash, parse_payment_method


@pytest.mark.parametrize("raw", ["Cash", "cash", " CASH ", "cash payment", "Paid in cash"])
def test_cash_variants(raw):
    assert parse_payment_method(raw) == CASH
    assert is_cash(raw)


@pytest.mark.parametrize("raw", ["UPI", "Bank Transfer", "cheque", "Cashfree gateway", "", None])
def test_everything_else_is_digital(raw):
    assert parse_payment_method(raw) == DIGITAL
