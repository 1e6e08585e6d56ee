"""Checks and conversions for the add/edit transaction form."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.config import EXPENSE_CATEGORIES, INCOME_CATEGORIES
from core.domain import FlowDirection, Transaction


def category_options(direction: FlowDirection) -> list[str]:
    """Catalog entries for `direction` as "emoji label" strings."""
    table = INCOME_CATEGORIES if direction is FlowDirection.INCOME else EXPENSE_CATEGORIES
    return [f"{emoji} {label}" for emoji, label in table]


def direction_of(t: Transaction) -> FlowDirection:
    return FlowDirection.EXPENSE if t.amount < 0 else FlowDirection.INCOME


def signed_amount(direction: FlowDirection, magnitude: Decimal) -> Decimal:
    magnitude = abs(Decimal(magnitude))
    return magnitude if direction is FlowDirection.INCOME else -magnitude


def validate_transaction_form(
    note: str,
    amount: Decimal,
    timestamp: datetime,
    category: Optional[str],
    now: Optional[datetime] = None,
) -> list[str]:
    """Return the problems with a form submission; empty when it is valid.

    `amount` is the unsigned value typed by the user, the direction picks
    the sign afterwards.
    """
    now = now or datetime.now()
    errors = []
    if not note or not note.strip():
        errors.append("Note is required")
    if amount is None or Decimal(amount) <= 0:
        errors.append("Amount must be greater than zero")
    if timestamp > now:
        errors.append("Date cannot be in the future")
    if not category:
        errors.append("Pick a category")
    return errors
