from datetime import datetime
from decimal import Decimal

from core.categories import summary_stats as category_summary
from core.domain import FlowDirection, TimePeriod
from core.repository import InMemoryTransactionRepository
from core.sample_data import sample_transactions
from core.services import TransactionService
from core.timeseries import generate_chart_data

NOW = datetime(2025, 3, 12, 15, 0)


def test_sample_transactions_relative_to_now():
    trans = sample_transactions(NOW)
    assert len(trans) == 20
    assert all(t.timestamp <= NOW for t in trans)
    assert len({t.id for t in trans}) == 20


def test_sample_week_chart():
    points = generate_chart_data(sample_transactions(NOW), TimePeriod.WEEK, NOW)
    assert points[-1].income == Decimal("2500.00")
    assert points[-1].expense == Decimal("17.49")
    assert points[-2].expense == Decimal("79.66")


def test_sample_month_expense_categories():
    summary = category_summary(sample_transactions(NOW), FlowDirection.EXPENSE, TimePeriod.MONTH, NOW)
    # coffee and restaurant entries each appear twice
    assert summary.category_count == 14


def test_seed_samples_through_service():
    repo = InMemoryTransactionRepository()
    svc = TransactionService(repo)
    assert svc.seed(sample_transactions(NOW)) == 20
    assert len(repo.fetch_all()) == 20
    assert len(svc.snapshot) == 20
