"""Category breakdowns with percentage shares for pie charts."""
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from core.config import DEFAULT_TOP_CATEGORIES, OTHER_CATEGORY, PALETTE_SIZE
from core.domain import CategorySlice, CategorySummary, FlowDirection, TimePeriod, Transaction
from core.window import filter_window


def normalize_category(category: str) -> str:
    return category if category else OTHER_CATEGORY


def group_by_category(trans: Iterable[Transaction]) -> dict[str, Decimal]:
    """Sum absolute amounts per category, keyed in first-encountered order."""
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for t in trans:
        totals[normalize_category(t.category)] += abs(t.amount)
    return dict(totals)


def _category_totals(
    transactions: Iterable[Transaction],
    direction: FlowDirection,
    period: TimePeriod,
    reference_date: Optional[datetime],
) -> dict[str, Decimal]:
    ref = reference_date or datetime.now()
    windowed = filter_window(transactions, period, ref)
    return group_by_category(t for t in windowed if direction.matches(t.amount))


def generate_pie_chart_data(
    transactions: Iterable[Transaction],
    direction: FlowDirection,
    period: TimePeriod,
    reference_date: Optional[datetime] = None,
) -> list[CategorySlice]:
    """Return slices sorted by amount, largest first.

    Equal amounts keep the order in which their categories first appear in
    the input; no other ordering is guaranteed.
    """
    totals = _category_totals(transactions, direction, period, reference_date)
    total_amount = sum(totals.values(), Decimal(0))

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)

    slices = []
    for rank, (category, amount) in enumerate(ordered):
        percentage = float(amount / total_amount * 100) if total_amount > 0 else 0.0
        slices.append(
            CategorySlice(
                category=category,
                amount=amount,
                color_index=rank % PALETTE_SIZE,
                percentage=percentage,
            )
        )
    return slices


def summary_stats(
    transactions: Iterable[Transaction],
    direction: FlowDirection,
    period: TimePeriod,
    reference_date: Optional[datetime] = None,
) -> CategorySummary:
    totals = _category_totals(transactions, direction, period, reference_date)
    return CategorySummary(
        total_amount=sum(totals.values(), Decimal(0)),
        category_count=len(totals),
    )


def top_categories(
    transactions: Iterable[Transaction],
    direction: FlowDirection,
    period: TimePeriod,
    limit: int = DEFAULT_TOP_CATEGORIES,
    reference_date: Optional[datetime] = None,
) -> list[CategorySlice]:
    slices = generate_pie_chart_data(transactions, direction, period, reference_date)
    return slices[: max(0, limit)]
