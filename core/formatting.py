"""Presentation helpers shared by the UI.

The aggregators emit raw decimals and opaque labels; everything locale or
display related lives here.
"""
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Optional

from core.config import CURRENCY_SYMBOL, MONTH_LABELS
from core.domain import (
    CategorySummary,
    FlowDirection,
    SummaryKind,
    SummaryRow,
    SummaryValue,
    TimePeriod,
)


def format_currency(amount: Decimal, symbol: str = CURRENCY_SYMBOL, places: int = 2) -> str:
    """Format as e.g. '€1,234.56'."""
    return f"{symbol}{amount:,.{places}f}"


def format_signed(amount: Decimal, symbol: str = CURRENCY_SYMBOL) -> str:
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(percentage: float) -> str:
    return f"{percentage:.1f}%"


def format_day_label(day: date, today: Optional[date] = None) -> str:
    """'Today', 'Yesterday' or e.g. 'Mar 12, 2025'."""
    today = today or date.today()
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return f"{MONTH_LABELS[day.month - 1]} {day.day}, {day.year}"


_RENDERERS: dict[SummaryKind, Callable[[SummaryValue, str], str]] = {
    # summary totals are shown without cents
    SummaryKind.CURRENCY: lambda v, symbol: format_currency(v.value, symbol, places=0),
    SummaryKind.COUNT: lambda v, symbol: f"{v.value:,d}",
    SummaryKind.TEXT: lambda v, symbol: v.value,
}


def render_summary_value(value: SummaryValue, symbol: str = CURRENCY_SYMBOL) -> str:
    return _RENDERERS[value.kind](value, symbol)


def category_summary_rows(
    summary: CategorySummary, direction: FlowDirection, period: TimePeriod
) -> list[SummaryRow]:
    return [
        SummaryRow(f"Total {direction.label}:", SummaryValue.currency(summary.total_amount)),
        SummaryRow("Categories:", SummaryValue.count(summary.category_count)),
        SummaryRow("Time Period:", SummaryValue.text(period.label)),
    ]
