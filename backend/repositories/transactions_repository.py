"""Transactions repository adapters.

The store is the single writer for transaction records and the only
authority assigning their ids.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Protocol
from uuid import uuid4

from shared.models import Transaction, TransactionCreateRequest, TransactionFilters, TransactionType


class TransactionsRepository(Protocol):
    def list_transactions(self) -> list[Transaction]:
        """Return a snapshot of every stored transaction in insertion order."""

    def search_transactions(self, filters: TransactionFilters) -> list[Transaction]:
        """Return filtered, limited transactions sorted by date descending."""

    def add_transaction(self, request: TransactionCreateRequest) -> Transaction:
        """Assign an id to a validated request, append it and return the stored record."""

    def count(self) -> int:
        """Return the number of stored transactions."""


def _utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SAMPLE_TRANSACTIONS: tuple[Transaction, ...] = (
    Transaction(
        id="1",
        amount=2500.0,
        description="Monthly Salary",
        category="salary",
        date=_utc(2024, 8, 1),
        type=TransactionType.INCOME,
    ),
    Transaction(
        id="2",
        amount=850.0,
        description="Rent Payment",
        category="housing",
        date=_utc(2024, 8, 1),
        type=TransactionType.EXPENSE,
    ),
    Transaction(
        id="3",
        amount=120.5,
        description="Grocery Shopping",
        category="food",
        date=_utc(2024, 8, 2),
        type=TransactionType.EXPENSE,
    ),
    Transaction(
        id="4",
        amount=500.0,
        description="Freelance Project",
        category="freelance",
        date=_utc(2024, 8, 3),
        type=TransactionType.INCOME,
    ),
    Transaction(
        id="5",
        amount=45.0,
        description="Gas Station",
        category="transportation",
        date=_utc(2024, 8, 4),
        type=TransactionType.EXPENSE,
    ),
    Transaction(
        id="6",
        amount=89.99,
        description="Streaming Subscriptions",
        category="entertainment",
        date=_utc(2024, 8, 5),
        type=TransactionType.EXPENSE,
    ),
)


class InMemoryTransactionsRepository:
    """Process-local store: an insertion-ordered id -> Transaction mapping behind one lock."""

    def __init__(self, seed: Iterable[Transaction] = ()) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, Transaction] = {}
        for transaction in seed:
            if transaction.id in self._items:
                raise ValueError(f"Duplicate transaction id in seed: {transaction.id}")
            self._items[transaction.id] = transaction

    def _new_id(self) -> str:
        # Caller holds the lock.
        while True:
            candidate = str(uuid4())
            if candidate not in self._items:
                return candidate

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return list(self._items.values())

    def search_transactions(self, filters: TransactionFilters) -> list[Transaction]:
        rows = self.list_transactions()

        if filters.type is not None:
            rows = [row for row in rows if row.type == filters.type]
        if filters.category:
            rows = [row for row in rows if row.category == filters.category]

        # The limit caps the insertion-ordered rows before the chronological sort.
        if filters.limit is not None:
            rows = rows[: filters.limit]

        return sorted(rows, key=lambda row: row.date, reverse=True)

    def add_transaction(self, request: TransactionCreateRequest) -> Transaction:
        with self._lock:
            transaction = Transaction(id=self._new_id(), **request.model_dump())
            self._items[transaction.id] = transaction
            return transaction

    def count(self) -> int:
        with self._lock:
            return len(self._items)
