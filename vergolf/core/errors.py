"""Error taxonomy for the authentication flows.

Every failure a handler can report is an :class:`AuthFlowError`. The
application installs one exception handler that renders these as
``{"error": ..., "details": ...}`` JSON with the error's status code.
"""

from __future__ import annotations

from typing import Any, Optional


class AuthFlowError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    message: str = "Authentication failed"

    def __init__(self, message: Optional[str] = None, *, details: Any = None) -> None:
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(AuthFlowError):
    status_code = 500
    message = "Server configuration error"


class InvalidInput(AuthFlowError):
    status_code = 400
    message = "Invalid request"


class NotAuthenticated(AuthFlowError):
    status_code = 401
    message = "No session found"


class UnknownProvider(AuthFlowError):
    status_code = 404
    message = "Unknown provider"


class UpstreamExchangeFailed(AuthFlowError):
    status_code = 400
    message = "Failed to exchange code for token"


class UpstreamInvalidResponse(AuthFlowError):
    status_code = 400
    message = "Invalid token response"


class UpstreamUserInfoFailed(AuthFlowError):
    status_code = 400
    message = "Failed to get user information"


class UpstreamInvalidProfile(AuthFlowError):
    status_code = 400
    message = "Invalid user information"


class StoreQueryFailed(AuthFlowError):
    status_code = 500
    message = "Database query failed"


class IdentityError(AuthFlowError):
    status_code = 500
    message = "Identity service error"


class ProfileCreationFailed(AuthFlowError):
    status_code = 500
    message = "Failed to complete onboarding"


class NetworkUnavailable(AuthFlowError):
    status_code = 503
    message = "Network error - please check your connection"


__all__ = [
    "AuthFlowError",
    "ConfigurationError",
    "IdentityError",
    "InvalidInput",
    "NetworkUnavailable",
    "NotAuthenticated",
    "ProfileCreationFailed",
    "StoreQueryFailed",
    "UnknownProvider",
    "UpstreamExchangeFailed",
    "UpstreamInvalidProfile",
    "UpstreamInvalidResponse",
    "UpstreamUserInfoFailed",
]
