"""API tests for the transaction list and create endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable

from fastapi.testclient import TestClient

import backend.api as api
from backend.repositories.transactions_repository import InMemoryTransactionsRepository
from backend.services.transactions import TransactionService
from shared.models import TransactionType
from tests.fakes import FailingTransactionsRepository, make_transaction, valid_payload


@dataclass
class _RecordingService:
    create_transaction: Callable[[object], object]


def _client_with(monkeypatch, repository) -> TestClient:
    service = TransactionService(transactions_repository=repository)
    monkeypatch.setattr(api, "get_transaction_service", lambda: service)
    return TestClient(api.app)


def _seeded_repository() -> InMemoryTransactionsRepository:
    return InMemoryTransactionsRepository(
        seed=[
            make_transaction("1", amount=3500.0, category="salary", day=1, type=TransactionType.INCOME),
            make_transaction("2", amount=120.5, category="food", day=2),
            make_transaction("3", amount=60.0, category="transportation", day=3),
            make_transaction("4", amount=45.0, category="food", day=4),
        ]
    )


def test_health_returns_ok() -> None:
    response = TestClient(api.app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_returns_envelope_newest_first(monkeypatch) -> None:
    client = _client_with(monkeypatch, _seeded_repository())

    response = client.get("/api/transaction")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["total"] == 4
    assert [row["id"] for row in payload["data"]] == ["4", "3", "2", "1"]
    assert payload["data"][0]["date"].startswith("2024-01-04")


def test_list_filters_by_type_and_category(monkeypatch) -> None:
    client = _client_with(monkeypatch, _seeded_repository())

    response = client.get("/api/transaction", params={"type": "expense", "category": "food"})

    payload = response.json()
    assert payload["total"] == 2
    assert [row["id"] for row in payload["data"]] == ["4", "2"]


def test_list_applies_limit_before_sorting(monkeypatch) -> None:
    client = _client_with(monkeypatch, _seeded_repository())

    response = client.get("/api/transaction", params={"limit": "2"})

    payload = response.json()
    assert payload["total"] == 2
    assert [row["id"] for row in payload["data"]] == ["2", "1"]


def test_list_ignores_unparseable_limit_and_unknown_type(monkeypatch) -> None:
    client = _client_with(monkeypatch, _seeded_repository())

    response = client.get("/api/transaction", params={"limit": "abc", "type": "refund"})

    assert response.status_code == 200
    assert response.json()["total"] == 4


def test_list_accepts_leading_digits_in_limit(monkeypatch) -> None:
    client = _client_with(monkeypatch, _seeded_repository())

    response = client.get("/api/transaction", params={"limit": "3items"})

    assert response.json()["total"] == 3


def test_list_returns_500_when_store_fails(monkeypatch) -> None:
    client = _client_with(monkeypatch, FailingTransactionsRepository())

    response = client.get("/api/transaction")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch transactions"}


def test_create_returns_201_and_stored_record(monkeypatch) -> None:
    repository = InMemoryTransactionsRepository()
    client = _client_with(monkeypatch, repository)

    response = client.post("/api/transaction", json=valid_payload(description="Groceries"))

    assert response.status_code == 201
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "Transaction created successfully"
    assert payload["data"]["description"] == "Groceries"
    assert payload["data"]["amount"] == 100
    assert payload["data"]["id"]
    assert repository.count() == 1

    listed = client.get("/api/transaction").json()
    assert listed["data"][0]["id"] == payload["data"]["id"]


def test_create_runs_service_off_the_event_loop(monkeypatch) -> None:
    service = TransactionService(transactions_repository=InMemoryTransactionsRepository())
    loop_running: list[bool] = []
    create = service.create_transaction

    def _recording_create(payload: object):
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            loop_running.append(False)
        else:
            loop_running.append(True)
        return create(payload)

    monkeypatch.setattr(api, "get_transaction_service", lambda: _RecordingService(_recording_create))
    client = TestClient(api.app)

    response = client.post("/api/transaction", json=valid_payload())

    assert response.status_code == 201
    assert loop_running == [False]


def test_create_ignores_client_supplied_id(monkeypatch) -> None:
    client = _client_with(monkeypatch, InMemoryTransactionsRepository())

    response = client.post("/api/transaction", json=valid_payload(id="client-id"))

    assert response.status_code == 201
    assert response.json()["data"]["id"] != "client-id"


def test_create_rejects_missing_fields(monkeypatch) -> None:
    repository = InMemoryTransactionsRepository()
    client = _client_with(monkeypatch, repository)
    payload = valid_payload()
    del payload["description"]

    response = client.post("/api/transaction", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing required fields"}
    assert repository.count() == 0


def test_create_rejects_invalid_type(monkeypatch) -> None:
    client = _client_with(monkeypatch, InMemoryTransactionsRepository())

    response = client.post("/api/transaction", json=valid_payload(type="refund"))

    assert response.status_code == 400
    assert response.json()["error"] == 'Invalid transaction type. Must be "income" or "expense"'


def test_create_rejects_non_positive_amount(monkeypatch) -> None:
    client = _client_with(monkeypatch, InMemoryTransactionsRepository())

    for amount in (0, -5):
        response = client.post("/api/transaction", json=valid_payload(amount=amount))

        assert response.status_code == 400
        assert response.json()["error"] == "Amount must be a positive number"


def test_create_rejects_invalid_date(monkeypatch) -> None:
    client = _client_with(monkeypatch, InMemoryTransactionsRepository())

    response = client.post("/api/transaction", json=valid_payload(date="yesterday"))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid date. Expected an ISO-8601 date string"


def test_create_rejects_date_outside_utc_range(monkeypatch) -> None:
    repository = InMemoryTransactionsRepository()
    client = _client_with(monkeypatch, repository)

    response = client.post("/api/transaction", json=valid_payload(date="9999-12-31T23:00:00-05:00"))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid date. Expected an ISO-8601 date string"
    assert repository.count() == 0


def test_create_with_malformed_body_returns_500(monkeypatch) -> None:
    repository = InMemoryTransactionsRepository()
    client = _client_with(monkeypatch, repository)

    response = client.post(
        "/api/transaction",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to create transaction"}
    assert repository.count() == 0


def test_create_returns_500_when_store_fails(monkeypatch) -> None:
    repository = FailingTransactionsRepository()
    client = _client_with(monkeypatch, repository)

    response = client.post("/api/transaction", json=valid_payload())

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to create transaction"}
    assert repository.calls == ["add_transaction"]


def test_unexpected_exception_returns_json_500(monkeypatch) -> None:
    def _broken_service():
        raise RuntimeError("boom")

    monkeypatch.setattr(api, "get_transaction_service", _broken_service)
    client = TestClient(api.app, raise_server_exceptions=False)

    response = client.get("/api/transaction")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal Server Error"}
