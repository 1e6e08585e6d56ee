from datetime import date, datetime, timedelta
from decimal import Decimal

from core.domain import FlowDirection, SummaryKind, TimePeriod, Transaction
from core.errors import StoreLoadError, StoreSaveError
from core.events import TRANSACTION_ADDED, TRANSACTION_UPDATED, EventBus
from core.repository import InMemoryTransactionRepository
from core.services import DashboardService, TransactionService

REF = datetime(2025, 3, 12, 15, 0)


class FlakyRepository(InMemoryTransactionRepository):
    def __init__(self, transactions=()):
        super().__init__(transactions)
        self.fail_fetch = False
        self.fail_save = False
        self.save_failures = 0

    def fetch_all(self):
        if self.fail_fetch:
            raise StoreLoadError("disk unavailable")
        return super().fetch_all()

    def save(self):
        if self.save_failures:
            self.save_failures -= 1
            raise StoreSaveError("disk full")
        if self.fail_save:
            raise StoreSaveError("disk full")


def make_tx(id, hours_ago, amount, category="Food", note=""):
    return Transaction(REF - timedelta(hours=hours_ago), Decimal(amount), note, category, id)


def test_load_returns_snapshot_tuple():
    svc = TransactionService(InMemoryTransactionRepository([make_tx("t1", 1, "-3")]))
    snapshot = svc.load()
    assert isinstance(snapshot, tuple)
    assert [t.id for t in snapshot] == ["t1"]
    assert svc.last_error is None


def test_add_saves_publishes_and_reloads():
    bus = EventBus()
    seen = []
    bus.subscribe(TRANSACTION_ADDED, lambda e: seen.append(e.payload["id"]))
    svc = TransactionService(InMemoryTransactionRepository(), bus)
    svc.load()

    t = svc.add(REF, Decimal("-9.99"), "Netflix", "📺 Streaming Services")

    assert t is not None
    assert seen == [t.id]
    assert svc.snapshot == (t,)


def test_delete_reloads_snapshot():
    svc = TransactionService(InMemoryTransactionRepository([make_tx("t1", 1, "-3"), make_tx("t2", 2, "-4")]))
    svc.load()
    assert svc.delete("t1") is True
    assert [t.id for t in svc.snapshot] == ["t2"]


def test_delete_unknown_id():
    svc = TransactionService(InMemoryTransactionRepository())
    svc.load()
    assert svc.delete("missing") is False


def test_failed_fetch_keeps_previous_snapshot():
    repo = FlakyRepository([make_tx("t1", 1, "-3")])
    svc = TransactionService(repo)
    before = svc.load()

    repo.fail_fetch = True
    after = svc.load()

    assert after == before
    assert "disk unavailable" in svc.last_error


def test_failed_save_reports_error():
    repo = FlakyRepository()
    repo.fail_save = True
    svc = TransactionService(repo)
    assert svc.add(REF, Decimal("1")) is None
    assert "disk full" in svc.last_error


def test_transaction_sections():
    snapshot = (
        make_tx("t1", 1, "-4.50", note="Morning coffee"),
        make_tx("t2", 2, "2500", "💰 Salary"),
        make_tx("t3", 24, "-45.67", "🛒 Groceries"),
    )
    sections = DashboardService().transaction_sections(snapshot, today=date(2025, 3, 12))
    assert [s["title"] for s in sections] == ["Today", "Yesterday"]
    assert sections[0]["total"] == Decimal("2495.50")
    assert [t.id for t in sections[0]["items"]] == ["t1", "t2"]


def test_transaction_sections_search():
    snapshot = (make_tx("t1", 1, "-4.50", note="Morning coffee"), make_tx("t2", 2, "2500", "💰 Salary"))
    sections = DashboardService().transaction_sections(snapshot, "salary", today=date(2025, 3, 12))
    assert len(sections) == 1
    assert [t.id for t in sections[0]["items"]] == ["t2"]


def test_breakdown_rows_are_tagged():
    snapshot = (make_tx("t1", 1, "-10"), make_tx("t2", 2, "-5", "Transport"))
    report = DashboardService().breakdown(snapshot, FlowDirection.EXPENSE, TimePeriod.MONTH, REF)
    assert [s.category for s in report["slices"]] == ["Food", "Transport"]
    assert report["summary"].total_amount == Decimal("15")
    kinds = [row.value.kind for row in report["rows"]]
    assert kinds == [SummaryKind.CURRENCY, SummaryKind.COUNT, SummaryKind.TEXT]
    assert report["rows"][0].label == "Total Expenses:"


def test_injected_aggregators():
    calls = []

    def fake_pie(snapshot, direction, period, ref):
        calls.append((direction, period))
        return ["stub"]

    svc = DashboardService(pie=fake_pie)
    report = svc.breakdown((), FlowDirection.INCOME, TimePeriod.YEAR, REF)
    assert report["slices"] == ["stub"]
    assert calls == [(FlowDirection.INCOME, TimePeriod.YEAR)]


def test_failed_add_is_rolled_back():
    repo = FlakyRepository()
    repo.save_failures = 1
    svc = TransactionService(repo)
    svc.load()

    assert svc.add(REF, Decimal("-5"), "ghost") is None
    assert repo.fetch_all() == []
    assert svc.add(REF, Decimal("-7"), "ok") is not None

    assert [t.note for t in svc.snapshot] == ["ok"]
    assert [t.note for t in repo.fetch_all()] == ["ok"]


def test_failed_delete_keeps_transaction():
    repo = FlakyRepository([make_tx("t1", 1, "-3"), make_tx("t2", 2, "-4")])
    svc = TransactionService(repo)
    svc.load()
    repo.save_failures = 1

    assert svc.delete("t1") is False
    assert "disk full" in svc.last_error
    assert sorted(t.id for t in repo.fetch_all()) == ["t1", "t2"]

    svc.load()
    assert svc.delete("t1") is True
    assert [t.id for t in svc.snapshot] == ["t2"]


def test_update_keeps_id_and_publishes():
    bus = EventBus()
    seen = []
    bus.subscribe(TRANSACTION_UPDATED, lambda e: seen.append(e.payload["id"]))
    svc = TransactionService(InMemoryTransactionRepository([make_tx("t1", 1, "-3", note="Coffee")]), bus)
    svc.load()

    updated = svc.update("t1", REF, Decimal("-4.20"), "Flat white", "☕ Coffee & Drinks")

    assert updated.id == "t1"
    assert seen == ["t1"]
    assert svc.snapshot == (updated,)
    assert svc.snapshot[0].amount == Decimal("-4.20")
    assert svc.snapshot[0].category == "☕ Coffee & Drinks"


def test_update_unknown_id():
    svc = TransactionService(InMemoryTransactionRepository())
    svc.load()
    assert svc.update("missing", REF, Decimal("1")) is None


def test_failed_update_restores_original():
    original = make_tx("t1", 1, "-3", note="Coffee")
    repo = FlakyRepository([original])
    svc = TransactionService(repo)
    svc.load()
    repo.save_failures = 1

    assert svc.update("t1", REF, Decimal("-99"), "Typo") is None
    assert repo.fetch_all() == [original]
    assert svc.snapshot == (original,)


def test_seed_adds_batch_in_one_save():
    svc = TransactionService(InMemoryTransactionRepository())
    batch = [make_tx("s1", 1, "-3"), make_tx("s2", 2, "10")]
    assert svc.seed(batch) == 2
    assert sorted(t.id for t in svc.snapshot) == ["s1", "s2"]


def test_seed_empty_batch():
    svc = TransactionService(InMemoryTransactionRepository())
    assert svc.seed([]) == 0


def test_failed_seed_leaves_store_empty():
    repo = FlakyRepository()
    repo.fail_save = True
    svc = TransactionService(repo)
    svc.load()

    assert svc.seed([make_tx("s1", 1, "-3"), make_tx("s2", 2, "10")]) == 0
    assert repo.fetch_all() == []
    assert svc.snapshot == ()
    assert "disk full" in svc.last_error
