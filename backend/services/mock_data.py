"""Synthetic transaction generator used to seed the in-memory store."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

from shared.models import Transaction, TransactionType


DEFAULT_MOCK_COUNT = 200
DEFAULT_WINDOW_DAYS = 180
INCOME_RATIO = 0.2


@dataclass(frozen=True, slots=True)
class _MockCategory:
    category: str
    descriptions: tuple[str, ...]
    min_amount: float
    max_amount: float


_EXPENSE_TABLE: tuple[_MockCategory, ...] = (
    _MockCategory("food", ("Grocery Shopping", "Restaurant Dinner", "Coffee Shop", "Lunch Takeout"), 5.0, 150.0),
    _MockCategory("housing", ("Rent Payment", "Home Insurance", "Maintenance Repair"), 200.0, 1500.0),
    _MockCategory("transportation", ("Gas Station", "Metro Card", "Ride Share", "Parking Fee"), 3.0, 90.0),
    _MockCategory("entertainment", ("Movie Tickets", "Streaming Subscriptions", "Concert", "Video Game"), 8.0, 120.0),
    _MockCategory("shopping", ("Clothing Store", "Online Order", "Electronics", "Bookstore"), 10.0, 400.0),
    _MockCategory("health", ("Pharmacy", "Gym Membership", "Doctor Visit"), 15.0, 250.0),
    _MockCategory("utilities", ("Electricity Bill", "Internet Bill", "Water Bill", "Phone Bill"), 30.0, 200.0),
)

_INCOME_TABLE: tuple[_MockCategory, ...] = (
    _MockCategory("salary", ("Monthly Salary", "Paycheck"), 1800.0, 5000.0),
    _MockCategory("freelance", ("Freelance Project", "Consulting Work", "Design Gig"), 150.0, 1500.0),
    _MockCategory("business", ("Product Sales", "Client Payment"), 100.0, 2000.0),
    _MockCategory("investment", ("Dividend Payment", "Interest Income"), 10.0, 600.0),
    _MockCategory("gift", ("Birthday Gift", "Cash Gift"), 20.0, 300.0),
)


def _random_id(rng: random.Random) -> str:
    return str(UUID(int=rng.getrandbits(128), version=4))


def _random_amount(rng: random.Random, entry: _MockCategory) -> float:
    return max(1.0, round(rng.uniform(entry.min_amount, entry.max_amount), 2))


def generate_mock_transactions(
    count: int = DEFAULT_MOCK_COUNT,
    *,
    rng: random.Random | None = None,
    now: datetime | None = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> list[Transaction]:
    """Return `count` valid transactions spread over the last `window_days`, newest first.

    Passing a seeded `rng` and a fixed `now` makes the output reproducible.
    """

    if count < 0:
        raise ValueError("count must be >= 0")
    if window_days < 1:
        raise ValueError("window_days must be >= 1")

    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    window_seconds = window_days * 24 * 60 * 60

    transactions: list[Transaction] = []
    seen_ids: set[str] = set()
    for _ in range(count):
        if rng.random() < INCOME_RATIO:
            transaction_type = TransactionType.INCOME
            entry = rng.choice(_INCOME_TABLE)
        else:
            transaction_type = TransactionType.EXPENSE
            entry = rng.choice(_EXPENSE_TABLE)

        transaction_id = _random_id(rng)
        while transaction_id in seen_ids:
            transaction_id = _random_id(rng)
        seen_ids.add(transaction_id)

        transactions.append(
            Transaction(
                id=transaction_id,
                amount=_random_amount(rng, entry),
                description=rng.choice(entry.descriptions),
                category=entry.category,
                date=now - timedelta(seconds=rng.randint(0, window_seconds)),
                type=transaction_type,
            )
        )

    return sorted(transactions, key=lambda transaction: transaction.date, reverse=True)
