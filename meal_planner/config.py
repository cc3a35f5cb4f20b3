"""Environment-backed application settings.

Values are read at call time so tests (and a reloaded .env) can change them
without re-importing.  app/main.py loads .env through python-dotenv before
anything reads these.

Known variables:
    DB_PATH                — SQLite file for planner records (see db/database.py).
    APP_PASSWORD           — shared password for the web UI login.
    SECRET_KEY             — signing key for session cookies.
    LOG_LEVEL              — DEBUG, INFO, WARNING, ... (default INFO).
    LOG_FORMAT             — "json" for structured logs, anything else for text.
    PURCHASE_ANIMATION_MS  — delay before the grocery list re-renders after a
                             purchase toggle (presentation only).
"""

import os

DEFAULT_SECRET_KEY = "dev-secret-change-in-production"
DEFAULT_PURCHASE_ANIMATION_MS = 400


def app_password() -> str:
    return os.environ.get("APP_PASSWORD", "")


def secret_key() -> str:
    return os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def log_json() -> bool:
    return os.environ.get("LOG_FORMAT", "").lower() == "json"


def purchase_animation_ms() -> int:
    """Re-render delay after a purchase toggle; falls back to the default on bad input."""
    raw = os.environ.get("PURCHASE_ANIMATION_MS", "")
    try:
        value = int(raw)
    except (ValueError, TypeError):
        return DEFAULT_PURCHASE_ANIMATION_MS
    return max(value, 0)
