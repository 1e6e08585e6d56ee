import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Optional

from core import categories
from core.domain import FlowDirection, TimePeriod, Transaction
from core.errors import StoreError
from core.events import (
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    TRANSACTION_UPDATED,
    Event,
    EventBus,
)
from core.formatting import category_summary_rows, format_day_label
from core.repository import TransactionRepository
from core.transforms import group_by_day, search_transactions, total_for_day

logger = logging.getLogger(__name__)


class TransactionService:
    """Owns the store and hands out immutable snapshots of its contents.

    Every mutation is applied to the repository and saved as one step: if
    either part raises a StoreError the change is undone, the error is
    logged and kept in `last_error`, and the previous snapshot stays in
    place so aggregation never sees a failed fetch. Successful mutations
    are published on the bus, which triggers a reload.
    """

    def __init__(self, repo: TransactionRepository, bus: Optional[EventBus] = None):
        self.repo = repo
        self.bus = bus or EventBus()
        self.snapshot: tuple[Transaction, ...] = ()
        self.last_error: Optional[str] = None
        for name in (TRANSACTION_ADDED, TRANSACTION_UPDATED, TRANSACTION_DELETED):
            self.bus.subscribe(name, self._on_change)

    def _on_change(self, event: Event) -> None:
        self.load()

    def _find(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.snapshot if t.id == transaction_id), None)

    def _commit(self, action: str, apply: Callable[[], None], undo: Callable[[], None]) -> bool:
        try:
            apply()
            self.repo.save()
        except StoreError as e:
            logger.error("failed to %s: %s", action, e)
            self.last_error = str(e)
            try:
                undo()
            except StoreError as undo_error:
                logger.error("could not roll back %s: %s", action, undo_error)
            return False
        return True

    def load(self) -> tuple[Transaction, ...]:
        try:
            self.snapshot = tuple(self.repo.fetch_all())
            self.last_error = None
        except StoreError as e:
            logger.error("failed to load transactions: %s", e)
            self.last_error = str(e)
        return self.snapshot

    def add(self, timestamp: datetime, amount: Decimal, note: str = "", category: str = "") -> Optional[Transaction]:
        t = Transaction(timestamp=timestamp, amount=Decimal(amount), note=note, category=category)
        if not self._commit("add transaction", lambda: self.repo.add(t), lambda: self.repo.delete(t)):
            return None
        logger.info("added transaction %s (%s)", t.id, t.amount)
        self.bus.publish(TRANSACTION_ADDED, {"id": t.id, "amount": t.amount})
        return t

    def update(
        self,
        transaction_id: str,
        timestamp: datetime,
        amount: Decimal,
        note: str = "",
        category: str = "",
    ) -> Optional[Transaction]:
        """Replace the fields of an existing transaction, keeping its id."""
        old = self._find(transaction_id)
        if old is None:
            logger.warning("update requested for unknown transaction %s", transaction_id)
            return None
        new = replace(old, timestamp=timestamp, amount=Decimal(amount), note=note, category=category)

        def apply():
            self.repo.delete(old)
            self.repo.add(new)

        def undo():
            # delete works by id, so this also clears a half-applied change
            self.repo.delete(new)
            self.repo.add(old)

        if not self._commit(f"update transaction {transaction_id}", apply, undo):
            return None
        logger.info("updated transaction %s (%s)", new.id, new.amount)
        self.bus.publish(TRANSACTION_UPDATED, {"id": new.id, "amount": new.amount})
        return new

    def delete(self, transaction_id: str) -> bool:
        target = self._find(transaction_id)
        if target is None:
            logger.warning("delete requested for unknown transaction %s", transaction_id)
            return False
        action = f"delete transaction {transaction_id}"
        if not self._commit(action, lambda: self.repo.delete(target), lambda: self.repo.add(target)):
            return False
        logger.info("deleted transaction %s", transaction_id)
        self.bus.publish(TRANSACTION_DELETED, {"id": transaction_id})
        return True

    def seed(self, transactions: Iterable[Transaction]) -> int:
        """Insert a batch in one save; returns how many were stored."""
        batch = tuple(transactions)

        def apply():
            for t in batch:
                self.repo.add(t)

        def undo():
            for t in batch:
                self.repo.delete(t)

        if not batch or not self._commit("seed transactions", apply, undo):
            return 0
        logger.info("seeded %d transactions", len(batch))
        self.bus.publish(TRANSACTION_ADDED, {"count": len(batch)})
        return len(batch)


class DashboardService:
    """Facade running the list and category pipelines over one snapshot.

    pie/summary callables are injected so callers can swap them; defaults
    are the core aggregators.
    """

    def __init__(
        self,
        pie: Callable[..., Any] = categories.generate_pie_chart_data,
        category_summary: Callable[..., Any] = categories.summary_stats,
    ):
        self.pie = pie
        self.category_summary = category_summary

    def transaction_sections(
        self, snapshot: tuple[Transaction, ...], search: str = "", today: Optional[date] = None
    ) -> list[Dict[str, Any]]:
        sections = []
        for day, items in group_by_day(search_transactions(snapshot, search)):
            sections.append({
                "day": day,
                "title": format_day_label(day, today),
                "total": total_for_day(items),
                "items": items,
            })
        return sections

    def breakdown(
        self,
        snapshot: tuple[Transaction, ...],
        direction: FlowDirection,
        period: TimePeriod,
        reference_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        summary = self.category_summary(snapshot, direction, period, reference_date)
        return {
            "direction": direction,
            "period": period,
            "slices": self.pie(snapshot, direction, period, reference_date),
            "summary": summary,
            "rows": category_summary_rows(summary, direction, period),
        }
