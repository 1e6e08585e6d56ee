import calendar
from datetime import datetime, timedelta
from typing import Iterable

from core.domain import TimePeriod, Transaction


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def add_months(dt: datetime, n: int) -> datetime:
    """Add n months to dt, clamping the day to the target month's length."""
    month = dt.month - 1 + n
    year = dt.year + month // 12
    month = month % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def window_bounds(period: TimePeriod, reference_date: datetime) -> tuple[datetime, datetime]:
    return reference_date - timedelta(days=period.days), reference_date


def by_interval(start: datetime, end: datetime, closed: bool = False):
    """Predicate for start <= ts < end, or start <= ts <= end when closed."""
    def _closed(t: Transaction) -> bool:
        return start <= t.timestamp <= end

    def _half_open(t: Transaction) -> bool:
        return start <= t.timestamp < end

    return _closed if closed else _half_open


def filter_window(
    transactions: Iterable[Transaction], period: TimePeriod, reference_date: datetime
) -> list[Transaction]:
    start, end = window_bounds(period, reference_date)
    return list(filter(by_interval(start, end, closed=True), transactions))
