"""Configuration helpers for environment variables."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_SEED_MODES = {"mock", "sample", "empty"}
_DEFAULT_SEED_MODE = "mock"
_DEFAULT_MOCK_COUNT = 200


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with safe environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if app_env().strip().lower() in {"dev", "local"}:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]

    ui_origin = (get_env("UI_ORIGIN", "") or "").strip()
    if ui_origin:
        return [ui_origin]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS or UI_ORIGIN",
        app_env(),
    )

    return []


def seed_mode() -> str:
    """Return how the transaction store is populated at startup."""
    raw_value = (get_env("BUDGET_SEED_MODE", "") or "").strip().lower()
    if not raw_value:
        return _DEFAULT_SEED_MODE
    if raw_value not in _SEED_MODES:
        logger.warning("budget_seed_mode_unknown value=%s fallback=%s", raw_value, _DEFAULT_SEED_MODE)
        return _DEFAULT_SEED_MODE
    return raw_value


def mock_transaction_count() -> int:
    """Return the number of mock transactions to generate, defaulting on invalid values."""
    raw_value = (get_env("BUDGET_MOCK_COUNT", "") or "").strip()
    try:
        parsed = int(raw_value)
    except ValueError:
        return _DEFAULT_MOCK_COUNT
    return parsed if parsed > 0 else _DEFAULT_MOCK_COUNT


def mock_seed() -> int | None:
    """Return the random seed for mock data, when configured."""
    raw_value = (get_env("BUDGET_MOCK_SEED", "") or "").strip()
    if not raw_value:
        return None
    try:
        return int(raw_value)
    except ValueError:
        logger.warning("budget_mock_seed_invalid value=%s", raw_value)
        return None


def log_level() -> str:
    """Return the configured root log level name."""
    return (get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper() or "INFO"


def server_host() -> str:
    """Return the interface uvicorn binds to."""
    return (get_env("HOST", "127.0.0.1") or "127.0.0.1").strip() or "127.0.0.1"


def server_port() -> int:
    """Return the uvicorn port, defaulting to 8000 on invalid values."""
    raw_value = (get_env("PORT", "") or "").strip()
    try:
        return int(raw_value)
    except ValueError:
        return 8000
