"""Centralized environment-driven settings.

Keep this module lightweight: stdlib only, no app imports, to avoid circular deps.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list of allowed origins, "*" allows everything.
CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost")

# Apply Alembic migrations when the app starts.
RUN_MIGRATIONS: bool = _bool_env("VIDTUBE_RUN_MIGRATIONS", True)

# Listing defaults. Reply listings use a narrower page on purpose.
DEFAULT_PAGE_LIMIT: int = _int_env("VIDTUBE_DEFAULT_PAGE_LIMIT", 10)
DEFAULT_REPLY_LIMIT: int = _int_env("VIDTUBE_DEFAULT_REPLY_LIMIT", 2)
MAX_PAGE_LIMIT: int = _int_env("VIDTUBE_MAX_PAGE_LIMIT", 100)

JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = _int_env("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", 60)
