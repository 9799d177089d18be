"""Composition root for backend services."""

from __future__ import annotations

import logging
import random

from backend.repositories.transactions_repository import (
    SAMPLE_TRANSACTIONS,
    InMemoryTransactionsRepository,
)
from backend.services.mock_data import generate_mock_transactions
from backend.services.transactions import TransactionService
from shared import config


logger = logging.getLogger(__name__)


def build_transactions_repository() -> InMemoryTransactionsRepository:
    """Build the in-memory store, seeded according to `BUDGET_SEED_MODE`."""

    mode = config.seed_mode()
    if mode == "empty":
        seed = []
    elif mode == "sample":
        seed = list(SAMPLE_TRANSACTIONS)
    else:
        rng = random.Random(config.mock_seed())
        seed = generate_mock_transactions(config.mock_transaction_count(), rng=rng)

    logger.info("transactions_repository_seeded mode=%s count=%s", mode, len(seed))
    return InMemoryTransactionsRepository(seed=seed)


def build_transaction_service() -> TransactionService:
    return TransactionService(transactions_repository=build_transactions_repository())
