"""Transaction service: the operation boundary over the transactions store.

Every public method returns either a result model or a `ToolError`; no
exception escapes to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from backend.reporting.dashboard import summarize_transactions
from backend.repositories.transactions_repository import TransactionsRepository
from backend.services.transaction_validation import (
    TransactionValidationError,
    validate_create_payload,
)
from shared.categories import default_category_id, list_categories
from shared.models import (
    CategoriesListResult,
    DashboardSummary,
    ToolError,
    ToolErrorCode,
    TransactionCreateResult,
    TransactionFilters,
    TransactionListResult,
    TransactionType,
)


logger = logging.getLogger(__name__)

LIST_FAILED_MESSAGE = "Failed to fetch transactions"
CREATE_FAILED_MESSAGE = "Failed to create transaction"


@dataclass(slots=True)
class TransactionService:
    transactions_repository: TransactionsRepository

    def list_transactions(self, filters: TransactionFilters) -> TransactionListResult | ToolError:
        try:
            items = self.transactions_repository.search_transactions(filters)
            return TransactionListResult(data=items, total=len(items))
        except Exception:
            logger.exception(
                "transactions_list_failed type=%s category=%s limit=%s",
                filters.type,
                filters.category,
                filters.limit,
            )
            return ToolError(code=ToolErrorCode.INTERNAL_ERROR, message=LIST_FAILED_MESSAGE)

    def create_transaction(self, payload: object) -> TransactionCreateResult | ToolError:
        try:
            request = validate_create_payload(payload)
        except TransactionValidationError as exc:
            logger.info("transaction_create_rejected reason=%s", exc.reason.value)
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message=exc.message,
                details={"reason": exc.reason.value},
            )

        try:
            transaction = self.transactions_repository.add_transaction(request)
        except Exception:
            logger.exception("transaction_create_failed")
            return ToolError(code=ToolErrorCode.INTERNAL_ERROR, message=CREATE_FAILED_MESSAGE)

        logger.info(
            "transaction_created id=%s type=%s category=%s",
            transaction.id,
            transaction.type.value,
            transaction.category,
        )
        return TransactionCreateResult(data=transaction)

    def list_categories(self, transaction_type: TransactionType | None = None) -> CategoriesListResult:
        types = [transaction_type] if transaction_type is not None else list(TransactionType)
        return CategoriesListResult(
            data=list_categories(transaction_type),
            defaults={member.value: default_category_id(member) for member in types},
        )

    def dashboard_summary(self, transaction_type: TransactionType) -> DashboardSummary | ToolError:
        try:
            snapshot = self.transactions_repository.list_transactions()
            return summarize_transactions(snapshot, transaction_type)
        except Exception:
            logger.exception("dashboard_summary_failed type=%s", transaction_type.value)
            return ToolError(code=ToolErrorCode.INTERNAL_ERROR, message=LIST_FAILED_MESSAGE)
