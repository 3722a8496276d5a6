"""Database model exports."""

from .account import ROLE_FIELDS, ROLE_ROUTES, ROLES, Account, dashboard_path
from .identity import AuthIdentity
from .session import (
    MockSession,
    ProfileForm,
    ProviderProfile,
    SessionData,
    TemporaryAuthData,
)

__all__ = [
    "Account",
    "AuthIdentity",
    "MockSession",
    "ProfileForm",
    "ProviderProfile",
    "ROLES",
    "ROLE_FIELDS",
    "ROLE_ROUTES",
    "SessionData",
    "TemporaryAuthData",
    "dashboard_path",
]
