"""AIVerID OAuth client.

Thin wrapper over the provider's three endpoints: the browser-facing
authorization URL, the token endpoint and the user-info endpoint. Failures
are translated into :mod:`vergolf.core.errors` types; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import httpx
from authlib.common.security import generate_token
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri
from pydantic import ValidationError

from ..core import config
from ..core.errors import (
    ConfigurationError,
    NetworkUnavailable,
    UpstreamExchangeFailed,
    UpstreamInvalidProfile,
    UpstreamInvalidResponse,
    UpstreamUserInfoFailed,
)
from ..models import ProviderProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSettings:
    """Credentials and endpoints for one identity provider."""

    name: str
    client_id: str
    client_secret: str
    auth_url: str
    token_url: str
    userinfo_url: str
    redirect_uri: str
    scope: str = "profile email"
    subject_field: str = "aiverid"

    def missing(self) -> List[str]:
        required = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "token_url": self.token_url,
            "userinfo_url": self.userinfo_url,
        }
        return [key for key, value in required.items() if not value]

    def require(self) -> None:
        missing = self.missing()
        if missing:
            logger.error("Provider %s is missing settings: %s", self.name, ", ".join(missing))
            raise ConfigurationError()


def provider_settings_from_env() -> ProviderSettings:
    return ProviderSettings(
        name="aiverid",
        client_id=config.AIVERID_CLIENT_ID,
        client_secret=config.AIVERID_CLIENT_SECRET,
        auth_url=config.AIVERID_AUTH_URL,
        token_url=config.AIVERID_TOKEN_URL,
        userinfo_url=config.AIVERID_USERINFO_URL,
        redirect_uri=config.OAUTH_REDIRECT_URI,
        scope=config.AIVERID_SCOPE,
    )


def _json_or_empty(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


class ProviderClient:
    """Talks to the provider on behalf of a single request."""

    def __init__(self, settings: ProviderSettings, http: httpx.AsyncClient) -> None:
        self.settings = settings
        self._http = http

    def authorization_url(self) -> Tuple[str, str]:
        """Return ``(url, state)`` for redirecting the browser to the provider."""

        if not self.settings.auth_url or not self.settings.client_id:
            raise ConfigurationError()
        state = generate_token(16)
        url = prepare_grant_uri(
            self.settings.auth_url,
            self.settings.client_id,
            "code",
            redirect_uri=self.settings.redirect_uri,
            scope=self.settings.scope,
            state=state,
        )
        return url, state

    async def exchange_code(self, code: str) -> Dict[str, Any]:
        """Trade an authorization code for the provider's token document."""

        try:
            response = await self._http.post(
                self.settings.token_url,
                json={
                    "grant_type": "authorization_code",
                    "code": code,
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                    "redirect_uri": self.settings.redirect_uri,
                },
            )
        except httpx.TransportError as exc:
            logger.error("Token endpoint unreachable: %s", exc)
            raise NetworkUnavailable(details=str(exc)) from exc

        if not response.is_success:
            details = _json_or_empty(response)
            logger.error("Token exchange failed (%s): %s", response.status_code, details)
            raise UpstreamExchangeFailed(details=details)

        token = _json_or_empty(response)
        if not isinstance(token, dict) or not token.get("access_token"):
            logger.error("Token response carried no access token")
            raise UpstreamInvalidResponse()
        return token

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Load the user-info document and require a subject id and email."""

        try:
            response = await self._http.get(
                self.settings.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.TransportError as exc:
            logger.error("User-info endpoint unreachable: %s", exc)
            raise NetworkUnavailable(details=str(exc)) from exc

        if not response.is_success:
            logger.error("Failed to fetch user info (%s)", response.status_code)
            raise UpstreamUserInfoFailed()

        data = _json_or_empty(response)
        if not isinstance(data, dict):
            raise UpstreamInvalidProfile()
        logger.debug("Provider user data: %s", data)

        try:
            profile = ProviderProfile.model_validate(
                {**data, "aiverid": data.get(self.settings.subject_field)}
            )
        except ValidationError as exc:
            logger.error("Invalid user data: %s", data)
            raise UpstreamInvalidProfile() from exc
        if profile.aiverid in (None, "") or not profile.email:
            logger.error("Invalid user data: %s", data)
            raise UpstreamInvalidProfile()
        return profile


__all__ = ["ProviderClient", "ProviderSettings", "provider_settings_from_env"]
