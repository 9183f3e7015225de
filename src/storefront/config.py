"""Environment-driven runtime settings.

Values are read on every call so tests can patch ``os.environ`` with
``monkeypatch`` without reloading modules.
"""

import os
from pathlib import Path

SESSION_COOKIE_NAME = "fat-cat-session"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 7
VISITOR_COOKIE_NAME = "visitor_id"
VISITOR_MAX_AGE_SECONDS = 60 * 60 * 24 * 30


def environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def is_production() -> bool:
    return environment() == "production"


def admin_username() -> str:
    return os.getenv("ADMIN_USERNAME", "admin")


def admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD", "fatcat2024")


def session_secret() -> str:
    return os.getenv("SESSION_SECRET", "dev-secret-change-in-production")


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", "data/uploads"))


def anthropic_api_key() -> str | None:
    return os.getenv("ANTHROPIC_API_KEY") or None


def resend_api_key() -> str | None:
    return os.getenv("RESEND_API_KEY") or None


def email_from() -> str:
    return os.getenv("EMAIL_FROM", "noreply@fatcatshop.com")


def owner_email() -> str | None:
    return os.getenv("OWNER_EMAIL") or None
