"""Application settings and environment helpers."""

from __future__ import annotations

import os
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Application security -------------------------------------------------------
SECRET_KEY = _require_env("SECRET_KEY")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").strip().lower()
IS_PRODUCTION = ENVIRONMENT == "production"

APP_URL = os.getenv("APP_URL", "http://localhost:3000").rstrip("/")

_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN")) or [APP_URL]
_local_dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *([] if IS_PRODUCTION else _local_dev_origins),
    ]
)
FRONTEND_ORIGIN = _frontend_origins[0]


# AIVerID OAuth configuration ------------------------------------------------
# Credentials are optional at import time; handlers report a configuration
# error per request when they are missing.
AIVERID_CLIENT_ID = os.getenv("AIVERID_CLIENT_ID", "")
AIVERID_CLIENT_SECRET = os.getenv("AIVERID_CLIENT_SECRET", "")
AIVERID_AUTH_URL = os.getenv("AIVERID_AUTH_URL", "")
AIVERID_TOKEN_URL = os.getenv("AIVERID_TOKEN_URL", "")
AIVERID_USERINFO_URL = os.getenv("AIVERID_USERINFO_URL", "")
AIVERID_SCOPE = os.getenv("AIVERID_SCOPE", "profile email")
OAUTH_REDIRECT_URI = os.getenv("OAUTH_REDIRECT_URI", f"{APP_URL}/oauth/callback")
HTTP_TIMEOUT_SECONDS = _env_int("HTTP_TIMEOUT_SECONDS", 20)


# Cookies --------------------------------------------------------------------
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "vergolf_session")
TEMP_SESSION_COOKIE = os.getenv("TEMP_SESSION_COOKIE", "vergolf_temp_session")
MOCK_SESSION_COOKIE = os.getenv("MOCK_SESSION_COOKIE", "vergolf_mock_session")

# 24 hours by default; set to 604800 for the seven-day variant.
SESSION_MAX_AGE = _env_int("SESSION_MAX_AGE", 60 * 60 * 24)
TEMP_SESSION_MAX_AGE = 60 * 30

COOKIE_DOMAIN = os.getenv("COOKIE_DOMAIN") or None
COOKIE_SECURE = _env_bool("COOKIE_SECURE", IS_PRODUCTION)
COOKIE_SAMESITE = os.getenv("COOKIE_SAMESITE", "lax")


# Persistence ----------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "")
DB_RESET = _env_bool("DB_RESET", False)


# Runtime behaviour ----------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


__all__ = [
    "AIVERID_AUTH_URL",
    "AIVERID_CLIENT_ID",
    "AIVERID_CLIENT_SECRET",
    "AIVERID_SCOPE",
    "AIVERID_TOKEN_URL",
    "AIVERID_USERINFO_URL",
    "ALLOWED_CORS_ORIGINS",
    "APP_URL",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "DATABASE_URL",
    "DB_RESET",
    "ENVIRONMENT",
    "FRONTEND_ORIGIN",
    "HTTP_TIMEOUT_SECONDS",
    "IS_PRODUCTION",
    "LOG_LEVEL",
    "MOCK_SESSION_COOKIE",
    "OAUTH_REDIRECT_URI",
    "SECRET_KEY",
    "SESSION_COOKIE",
    "SESSION_MAX_AGE",
    "TEMP_SESSION_COOKIE",
    "TEMP_SESSION_MAX_AGE",
]
