"""Category catalog used to label and decorate transactions.

The store treats `category` as an opaque string. This catalog is a separate
lookup keyed by the same string, with a fallback for ids it does not know.
"""

from __future__ import annotations

from shared.models import Category, TransactionType


DEFAULT_ICON = "credit-card"
FALLBACK_CATEGORY_ID = "other"

EXPENSE_CATEGORIES: tuple[Category, ...] = (
    Category(id="housing", name="Housing", icon="home", type=TransactionType.EXPENSE),
    Category(id="food", name="Food & Dining", icon="utensils", type=TransactionType.EXPENSE),
    Category(id="transportation", name="Transportation", icon="car", type=TransactionType.EXPENSE),
    Category(id="entertainment", name="Entertainment", icon="film", type=TransactionType.EXPENSE),
    Category(id="shopping", name="Shopping", icon="shopping-bag", type=TransactionType.EXPENSE),
    Category(id="health", name="Health & Fitness", icon="heart", type=TransactionType.EXPENSE),
    Category(id="utilities", name="Utilities", icon="zap", type=TransactionType.EXPENSE),
    Category(id="other", name="Other", icon="file-text", type=TransactionType.EXPENSE),
)

INCOME_CATEGORIES: tuple[Category, ...] = (
    Category(id="salary", name="Salary", icon="briefcase", type=TransactionType.INCOME),
    Category(id="freelance", name="Freelance", icon="laptop", type=TransactionType.INCOME),
    Category(id="business", name="Business", icon="building-2", type=TransactionType.INCOME),
    Category(id="investment", name="Investment", icon="trending-up", type=TransactionType.INCOME),
    Category(id="gift", name="Gift", icon="gift", type=TransactionType.INCOME),
    Category(id="other", name="Other", icon="dollar-sign", type=TransactionType.INCOME),
)

# Icons shown next to transactions on the dashboard list.
_TRANSACTION_ICONS: dict[str, str] = {
    "food": "utensils",
    "transportation": "car",
    "utilities": "zap",
    "salary": "dollar-sign",
    "freelance": "laptop",
    "bonus": "gift",
    "entertainment": "film",
    "shopping": "shopping-bag",
    "health": "heart",
    "healthcare": "heart",
    "education": "book-open",
    "housing": "credit-card",
    "investments": "bar-chart-3",
    "business": "dollar-sign",
    "travel": "film",
    "subscriptions": "film",
    "default": DEFAULT_ICON,
}


def default_category_id(transaction_type: TransactionType) -> str:
    """Return the category preselected by the creation form for a type."""

    return "food" if transaction_type == TransactionType.EXPENSE else "salary"


def list_categories(transaction_type: TransactionType | None = None) -> list[Category]:
    """Return catalog entries, optionally restricted to one transaction type."""

    if transaction_type == TransactionType.EXPENSE:
        return list(EXPENSE_CATEGORIES)
    if transaction_type == TransactionType.INCOME:
        return list(INCOME_CATEGORIES)
    return [*EXPENSE_CATEGORIES, *INCOME_CATEGORIES]


def category_icon(category_id: str) -> str:
    return _TRANSACTION_ICONS.get(category_id, _TRANSACTION_ICONS["default"])


def lookup_category(category_id: str, transaction_type: TransactionType) -> Category:
    """Return the catalog entry for an id, or a fallback entry for unknown ids."""

    normalized = category_id.strip() or FALLBACK_CATEGORY_ID
    for category in list_categories(transaction_type):
        if category.id == normalized:
            return category

    return Category(
        id=normalized,
        name=normalized.replace("_", " ").replace("-", " ").title(),
        icon=category_icon(normalized),
        type=transaction_type,
    )
