"""Tests for store seeding in the composition root."""

from backend.factory import build_transaction_service, build_transactions_repository
from backend.repositories.transactions_repository import SAMPLE_TRANSACTIONS
from shared.models import TransactionFilters, TransactionListResult


def test_empty_seed_mode_builds_empty_store(monkeypatch) -> None:
    monkeypatch.setenv("BUDGET_SEED_MODE", "empty")

    assert build_transactions_repository().count() == 0


def test_sample_seed_mode_loads_fixed_records(monkeypatch) -> None:
    monkeypatch.setenv("BUDGET_SEED_MODE", "sample")

    repository = build_transactions_repository()

    assert repository.list_transactions() == list(SAMPLE_TRANSACTIONS)


def test_mock_seed_mode_honors_count_and_seed(monkeypatch) -> None:
    monkeypatch.setenv("BUDGET_SEED_MODE", "mock")
    monkeypatch.setenv("BUDGET_MOCK_COUNT", "30")
    monkeypatch.setenv("BUDGET_MOCK_SEED", "5")

    repository = build_transactions_repository()

    assert repository.count() == 30


def test_build_transaction_service_wires_repository(monkeypatch) -> None:
    monkeypatch.setenv("BUDGET_SEED_MODE", "sample")

    result = build_transaction_service().list_transactions(TransactionFilters())

    assert isinstance(result, TransactionListResult)
    assert result.total == len(SAMPLE_TRANSACTIONS)
