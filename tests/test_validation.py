from datetime import datetime, timedelta
from decimal import Decimal

from core.domain import FlowDirection, Transaction
from core.validation import (
    category_options,
    direction_of,
    signed_amount,
    validate_transaction_form,
)

NOW = datetime(2025, 3, 12, 15, 0)


def test_valid_form_has_no_errors():
    errors = validate_transaction_form("Lunch", Decimal("12.50"), NOW, "🍕 Restaurants", now=NOW)
    assert errors == []


def test_every_field_reported():
    errors = validate_transaction_form("  ", Decimal("0"), NOW + timedelta(minutes=1), "", now=NOW)
    assert errors == [
        "Note is required",
        "Amount must be greater than zero",
        "Date cannot be in the future",
        "Pick a category",
    ]


def test_negative_or_missing_amount_rejected():
    assert "Amount must be greater than zero" in validate_transaction_form("x", Decimal("-1"), NOW, "c", now=NOW)
    assert "Amount must be greater than zero" in validate_transaction_form("x", None, NOW, "c", now=NOW)


def test_past_date_accepted():
    assert validate_transaction_form("x", Decimal("1"), NOW - timedelta(days=400), "c", now=NOW) == []


def test_category_options_per_direction():
    income = category_options(FlowDirection.INCOME)
    expense = category_options(FlowDirection.EXPENSE)
    assert income[0] == "💰 Salary"
    assert "🛒 Groceries" in expense
    assert expense[-1] == "❓ Other"
    assert not set(income) & set(expense)


def test_signed_amount():
    assert signed_amount(FlowDirection.INCOME, Decimal("10")) == Decimal("10")
    assert signed_amount(FlowDirection.EXPENSE, Decimal("10")) == Decimal("-10")
    assert signed_amount(FlowDirection.EXPENSE, Decimal("-10")) == Decimal("-10")


def test_direction_of():
    assert direction_of(Transaction(NOW, Decimal("-1"))) is FlowDirection.EXPENSE
    assert direction_of(Transaction(NOW, Decimal("5"))) is FlowDirection.INCOME
