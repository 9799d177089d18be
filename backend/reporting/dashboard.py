"""Dashboard aggregations derived from a transaction snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timezone

from shared.models import DailyTotal, DashboardSummary, Transaction, TransactionType


def _round_cents(value: float) -> float:
    return round(value, 2)


def _calendar_day(transaction: Transaction) -> date:
    return transaction.date.astimezone(timezone.utc).date()


def build_daily_series(
    transactions: Iterable[Transaction], transaction_type: TransactionType
) -> list[DailyTotal]:
    """Group one type's transactions by UTC calendar day, oldest day first."""

    grouped: dict[date, tuple[float, int]] = {}
    for transaction in transactions:
        if transaction.type != transaction_type:
            continue
        day = _calendar_day(transaction)
        total, count = grouped.get(day, (0.0, 0))
        grouped[day] = (total + transaction.amount, count + 1)

    return [
        DailyTotal(date=day, amount=_round_cents(total), count=count)
        for day, (total, count) in sorted(grouped.items())
    ]


def summarize_transactions(
    transactions: Iterable[Transaction], transaction_type: TransactionType
) -> DashboardSummary:
    rows = [transaction for transaction in transactions if transaction.type == transaction_type]
    total = sum((row.amount for row in rows), 0.0)
    count = len(rows)

    return DashboardSummary(
        type=transaction_type,
        total=_round_cents(total),
        count=count,
        average=_round_cents(total / count) if count else 0.0,
        category_count=len({row.category for row in rows}),
        series=build_daily_series(rows, transaction_type),
        transactions=sorted(rows, key=lambda row: row.date, reverse=True),
    )
