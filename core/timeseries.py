"""Income/expense series bucketed by day, week or month for bar charts."""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from core.config import MONTH_LABELS, WEEKDAY_LABELS
from core.domain import PeriodSummary, TimePeriod, TimeSeriesPoint, Transaction
from core.window import add_months, by_interval, filter_window, start_of_day


def calculate_income(trans: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in trans if t.amount > 0), Decimal(0))


def calculate_expenses(trans: Iterable[Transaction]) -> Decimal:
    """Total expenses as a positive amount."""
    return abs(sum((t.amount for t in trans if t.amount < 0), Decimal(0)))


def _point(label: str, trans: list[Transaction], start: datetime, end: datetime) -> TimeSeriesPoint:
    bucket = list(filter(by_interval(start, end), trans))
    return TimeSeriesPoint(
        label=label,
        income=calculate_income(bucket),
        expense=calculate_expenses(bucket),
    )


def _daily(trans: list[Transaction], ref: datetime) -> list[TimeSeriesPoint]:
    data = []
    for i in range(TimePeriod.WEEK.buckets):
        day = ref - timedelta(days=i)
        day_start = start_of_day(day)
        label = WEEKDAY_LABELS[day.weekday()]
        data.append(_point(label, trans, day_start, day_start + timedelta(days=1)))
    return data


def _weekly(trans: list[Transaction], ref: datetime) -> list[TimeSeriesPoint]:
    count = TimePeriod.MONTH.buckets
    data = []
    for i in range(count):
        week_start = ref - timedelta(weeks=i)
        # labelled by position: oldest bucket is "Week 1"
        label = f"Week {count - i}"
        data.append(_point(label, trans, week_start, week_start + timedelta(weeks=1)))
    return data


def _monthly(trans: list[Transaction], ref: datetime) -> list[TimeSeriesPoint]:
    data = []
    for i in range(TimePeriod.YEAR.buckets):
        month_start = add_months(ref, -i)
        month_end = add_months(ref, -i + 1)
        label = MONTH_LABELS[month_start.month - 1]
        data.append(_point(label, trans, month_start, month_end))
    return data


_BUCKETERS = {
    TimePeriod.WEEK: _daily,
    TimePeriod.MONTH: _weekly,
    TimePeriod.YEAR: _monthly,
}


def generate_chart_data(
    transactions: Iterable[Transaction],
    period: TimePeriod,
    reference_date: Optional[datetime] = None,
) -> list[TimeSeriesPoint]:
    """Return one point per bucket of the period, oldest first.

    Buckets are built backward from reference_date (newest first) and the
    result is reversed before returning. Empty buckets yield zero points.
    """
    ref = reference_date or datetime.now()
    windowed = filter_window(transactions, period, ref)
    data = _BUCKETERS[period](windowed, ref)
    return list(reversed(data))


def recent_data(
    transactions: Iterable[Transaction],
    count: int,
    period: TimePeriod,
    reference_date: Optional[datetime] = None,
) -> list[TimeSeriesPoint]:
    if count <= 0:
        return []
    return generate_chart_data(transactions, period, reference_date)[-count:]


def summary_stats(
    transactions: Iterable[Transaction],
    period: TimePeriod,
    reference_date: Optional[datetime] = None,
) -> PeriodSummary:
    ref = reference_date or datetime.now()
    windowed = filter_window(transactions, period, ref)
    return PeriodSummary(
        income=calculate_income(windowed),
        expense=calculate_expenses(windowed),
    )
