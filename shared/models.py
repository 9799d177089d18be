"""Pydantic contracts shared across the backend and its HTTP layer."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


DESCRIPTION_MAX_LENGTH = 100


class ToolErrorCode(str, Enum):
    """Stable error codes returned at the service boundary."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class ValidationReason(str, Enum):
    """Distinct reasons a create request can be rejected."""

    MISSING_FIELDS = "missing_fields"
    INVALID_TYPE = "invalid_type"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_DATE = "invalid_date"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TransactionCreateRequest(BaseModel):
    """Validated candidate record, before the store assigns an id."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    amount: float = Field(gt=0, allow_inf_nan=False)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1)
    date: datetime
    type: TransactionType

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return _as_utc(value)


class Transaction(TransactionCreateRequest):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)


class TransactionFilters(BaseModel):
    """Filters accepted by the list operation."""

    model_config = ConfigDict(extra="forbid")

    type: TransactionType | None = None
    category: str | None = None
    limit: int | None = Field(default=None, ge=1)


class TransactionListResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    data: list[Transaction]
    total: int


class TransactionCreateResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    message: str = "Transaction created successfully"
    data: Transaction


class Category(BaseModel):
    """Display metadata for an opaque category id."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    icon: str
    type: TransactionType


class CategoriesListResult(BaseModel):
    """Catalog entries plus the form defaults a client needs to build the create form."""

    model_config = ConfigDict(extra="forbid")

    success: bool = True
    data: list[Category]
    defaults: dict[str, str] = Field(default_factory=dict)
    description_max_length: int = DESCRIPTION_MAX_LENGTH


class DailyTotal(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: date
    amount: float
    count: int


class DashboardSummary(BaseModel):
    """Derived dashboard view for a single transaction type."""

    model_config = ConfigDict(extra="forbid")

    type: TransactionType
    total: float
    count: int
    average: float
    category_count: int
    series: list[DailyTotal]
    transactions: list[Transaction]


class DashboardResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    data: DashboardSummary


class ToolError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: ToolErrorCode
    message: str
    details: dict[str, object] | None = None
