import json
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from functools import reduce
from typing import Callable, Iterable, Iterator

from core.domain import Transaction
from core.errors import StoreLoadError


def transaction_from_dict(d: dict) -> Transaction:
    kwargs = {
        "timestamp": datetime.fromisoformat(d["timestamp"]),
        "amount": Decimal(str(d["amount"])),
        "note": d.get("note", ""),
        "category": d.get("category", ""),
    }
    if d.get("id"):
        kwargs["id"] = d["id"]
    return Transaction(**kwargs)


def transaction_to_dict(t: Transaction) -> dict:
    # amounts as strings so Decimal survives the round trip
    return {
        "id": t.id,
        "timestamp": t.timestamp.isoformat(),
        "amount": str(t.amount),
        "note": t.note,
        "category": t.category,
    }


def load_transactions(path: str) -> tuple[Transaction, ...]:
    """Decode a {"transactions": [...]} JSON document."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return tuple(transaction_from_dict(t) for t in data["transactions"])
    except (OSError, ValueError, KeyError, TypeError, InvalidOperation) as e:
        raise StoreLoadError(f"cannot read {path}: {e}") from e


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def matches_text(text: str):
    needle = text.casefold()

    def _filter(t: Transaction) -> bool:
        return (
            needle in t.note.casefold()
            or needle in t.category.casefold()
            or needle in str(t.amount).casefold()
        )

    return _filter


def search_transactions(
    trans: Iterable[Transaction], text: str
) -> tuple[Transaction, ...]:
    if not text:
        return tuple(trans)
    return tuple(iter_transactions(trans, matches_text(text)))


def group_by_day(
    trans: Iterable[Transaction],
) -> list[tuple[date, list[Transaction]]]:
    """Group into day sections, newest day first and newest item first."""
    days: dict[date, list[Transaction]] = defaultdict(list)
    for t in trans:
        days[t.timestamp.date()].append(t)

    return [
        (day, sorted(items, key=lambda t: t.timestamp, reverse=True))
        for day, items in sorted(days.items(), key=lambda kv: kv[0], reverse=True)
    ]


def total_for_day(items: Iterable[Transaction]) -> Decimal:
    return reduce(lambda acc, t: acc + t.amount, items, Decimal(0))
