from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union
from uuid import uuid4

from core.config import CATEGORY_PALETTE, PERIOD_BUCKETS, PERIOD_DAYS


class TimePeriod(Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def days(self) -> int:
        return PERIOD_DAYS[self.value]

    @property
    def buckets(self) -> int:
        return PERIOD_BUCKETS[self.value]

    @property
    def label(self) -> str:
        return self.value.capitalize()


class FlowDirection(Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return "Income" if self is FlowDirection.INCOME else "Expenses"

    def matches(self, amount: Decimal) -> bool:
        # zero belongs to neither direction
        if self is FlowDirection.INCOME:
            return amount > 0
        return amount < 0


@dataclass(frozen=True)
class Transaction:
    timestamp: datetime
    amount: Decimal  # + for income, - for expense
    note: str = ""
    category: str = ""
    id: str = field(default_factory=lambda: uuid4().hex)


@dataclass(frozen=True)
class TimeSeriesPoint:
    label: str            # "Mon", "Week 1", "Jan"
    income: Decimal
    expense: Decimal      # stored as a positive value

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    @property
    def is_profit(self) -> bool:
        return self.net > 0

    @property
    def is_loss(self) -> bool:
        return self.net < 0

    @property
    def is_break_even(self) -> bool:
        return self.net == 0

    @property
    def has_activity(self) -> bool:
        return self.income > 0 or self.expense > 0


@dataclass(frozen=True)
class CategorySlice:
    category: str
    amount: Decimal
    color_index: int
    percentage: float = 0.0

    @property
    def color(self) -> str:
        return CATEGORY_PALETTE[self.color_index % len(CATEGORY_PALETTE)]

    @property
    def has_activity(self) -> bool:
        return self.amount > 0


@dataclass(frozen=True)
class CategorySummary:
    total_amount: Decimal
    category_count: int


@dataclass(frozen=True)
class PeriodSummary:
    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


class SummaryKind(Enum):
    CURRENCY = "currency"
    COUNT = "count"
    TEXT = "text"


@dataclass(frozen=True)
class SummaryValue:
    kind: SummaryKind
    value: Union[Decimal, int, str]

    @classmethod
    def currency(cls, amount: Decimal) -> "SummaryValue":
        return cls(SummaryKind.CURRENCY, amount)

    @classmethod
    def count(cls, n: int) -> "SummaryValue":
        return cls(SummaryKind.COUNT, n)

    @classmethod
    def text(cls, s: str) -> "SummaryValue":
        return cls(SummaryKind.TEXT, s)


@dataclass(frozen=True)
class SummaryRow:
    label: str
    value: SummaryValue
