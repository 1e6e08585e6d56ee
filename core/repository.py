import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Protocol

from core.domain import Transaction
from core.errors import StoreSaveError
from core.transforms import load_transactions, transaction_to_dict

logger = logging.getLogger(__name__)


class TransactionRepository(Protocol):
    def fetch_all(self) -> list[Transaction]: ...

    def add(self, t: Transaction) -> None: ...

    def delete(self, t: Transaction) -> None: ...

    def save(self) -> None: ...


class InMemoryTransactionRepository:
    """Keeps transactions in a list; save() is a no-op."""

    def __init__(self, transactions=()):
        self._items: list[Transaction] = list(transactions)

    def fetch_all(self) -> list[Transaction]:
        return sorted(self._items, key=lambda t: t.timestamp)

    def add(self, t: Transaction) -> None:
        self._items.append(t)

    def delete(self, t: Transaction) -> None:
        self._items = [x for x in self._items if x.id != t.id]

    def save(self) -> None:
        pass


class JsonTransactionRepository(InMemoryTransactionRepository):
    """Transactions persisted as a JSON document at `path`.

    The file is read lazily on first access. save() writes to a .tmp sibling
    and swaps it in with os.replace().
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = Path(path)
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        if self.path.exists():
            self._items = list(load_transactions(str(self.path)))
            logger.info("loaded %d transactions from %s", len(self._items), self.path)
        self._loaded = True

    def fetch_all(self) -> list[Transaction]:
        self._ensure_loaded()
        return super().fetch_all()

    def add(self, t: Transaction) -> None:
        self._ensure_loaded()
        super().add(t)

    def delete(self, t: Transaction) -> None:
        self._ensure_loaded()
        super().delete(t)

    def save(self) -> None:
        self._ensure_loaded()
        payload = {"transactions": [transaction_to_dict(t) for t in self._items]}
        tmp = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StoreSaveError(f"cannot write {self.path}: {e}") from e
        logger.debug("saved %d transactions to %s", len(self._items), self.path)
