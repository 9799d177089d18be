"""Validation of create payloads and lenient parsing of list query parameters."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone

from shared.models import (
    TransactionCreateRequest,
    TransactionFilters,
    TransactionType,
    ValidationReason,
)


REQUIRED_FIELDS: tuple[str, ...] = ("amount", "description", "category", "date", "type")

VALIDATION_MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.MISSING_FIELDS: "Missing required fields",
    ValidationReason.INVALID_TYPE: 'Invalid transaction type. Must be "income" or "expense"',
    ValidationReason.INVALID_AMOUNT: "Amount must be a positive number",
    ValidationReason.INVALID_DATE: "Invalid date. Expected an ISO-8601 date string",
}

_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")
_TYPE_VALUES = {member.value for member in TransactionType}


class TransactionValidationError(ValueError):
    """Raised when a create payload violates an input precondition."""

    def __init__(self, reason: ValidationReason) -> None:
        self.reason = reason
        self.message = VALIDATION_MESSAGES[reason]
        super().__init__(self.message)


def _is_missing(value: object) -> bool:
    return value is None or value == ""


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or date-time string into a UTC-aware datetime.

    `Z` is accepted as UTC and naive values are taken as UTC. Raises
    `OverflowError` when the UTC instant falls outside the datetime range.
    """

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def validate_create_payload(payload: object) -> TransactionCreateRequest:
    """Validate a raw create payload; the first failing check wins."""

    if not isinstance(payload, Mapping):
        raise TransactionValidationError(ValidationReason.MISSING_FIELDS)

    if any(_is_missing(payload.get(field_name)) for field_name in REQUIRED_FIELDS):
        raise TransactionValidationError(ValidationReason.MISSING_FIELDS)

    description = payload["description"]
    category = payload["category"]
    if not isinstance(description, str) or not isinstance(category, str):
        raise TransactionValidationError(ValidationReason.MISSING_FIELDS)

    raw_type = payload["type"]
    if not isinstance(raw_type, str) or raw_type not in _TYPE_VALUES:
        raise TransactionValidationError(ValidationReason.INVALID_TYPE)

    amount = payload["amount"]
    try:
        amount_is_valid = _is_number(amount) and math.isfinite(amount) and amount > 0
    except OverflowError:
        amount_is_valid = False
    if not amount_is_valid:
        raise TransactionValidationError(ValidationReason.INVALID_AMOUNT)

    raw_date = payload["date"]
    if not isinstance(raw_date, str):
        raise TransactionValidationError(ValidationReason.INVALID_DATE)
    try:
        parsed_date = parse_iso_datetime(raw_date)
    except (ValueError, OverflowError) as exc:
        raise TransactionValidationError(ValidationReason.INVALID_DATE) from exc

    return TransactionCreateRequest(
        amount=float(amount),
        description=description,
        category=category,
        date=parsed_date,
        type=TransactionType(raw_type),
    )


def parse_limit(raw_limit: str | None) -> int | None:
    """Parse a limit like JavaScript `parseInt`; unusable values mean no limit."""

    if raw_limit is None:
        return None
    match = _LEADING_INT_PATTERN.match(raw_limit)
    if match is None:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def parse_type(raw_type: str | None) -> TransactionType | None:
    if raw_type is None or raw_type not in _TYPE_VALUES:
        return None
    return TransactionType(raw_type)


def parse_list_filters(
    *,
    type: str | None = None,
    category: str | None = None,
    limit: str | None = None,
) -> TransactionFilters:
    """Build list filters from raw query values, ignoring anything unusable."""

    return TransactionFilters(
        type=parse_type(type),
        category=category or None,
        limit=parse_limit(limit),
    )
