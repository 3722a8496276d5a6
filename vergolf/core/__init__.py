"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    APP_URL,
    COOKIE_DOMAIN,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    DB_RESET,
    FRONTEND_ORIGIN,
    MOCK_SESSION_COOKIE,
    SECRET_KEY,
    SESSION_COOKIE,
    SESSION_MAX_AGE,
    TEMP_SESSION_COOKIE,
    TEMP_SESSION_MAX_AGE,
)
from .database import engine, get_session
from .log import configure_logging
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "APP_URL",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "DB_RESET",
    "FRONTEND_ORIGIN",
    "MOCK_SESSION_COOKIE",
    "SECRET_KEY",
    "SESSION_COOKIE",
    "SESSION_MAX_AGE",
    "TEMP_SESSION_COOKIE",
    "TEMP_SESSION_MAX_AGE",
    "configure_logging",
    "engine",
    "get_session",
    "utcnow",
]
