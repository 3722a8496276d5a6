"""Request-scoped dependencies and cookie helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, AsyncIterator, Dict

import httpx
from fastapi import Depends, Request, Response
from sqlmodel import Session

from ..core import config, get_session
from ..core.errors import UnknownProvider
from ..models import Account, SessionData, TemporaryAuthData
from ..services import (
    SESSION_PURPOSE,
    TEMP_SESSION_PURPOSE,
    LocalIdentityAdmin,
    ProviderClient,
    ProviderSettings,
    SQLAccountStore,
    TokenCodec,
    provider_settings_from_env,
)

SUPPORTED_PROVIDERS = ("aiverid",)


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Return the JSON object body, or an empty dict when absent or malformed."""

    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def get_provider_settings() -> ProviderSettings:
    return provider_settings_from_env()


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS) as client:
        yield client


def get_provider_client(
    provider: str,
    settings: ProviderSettings = Depends(get_provider_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> ProviderClient:
    if provider not in SUPPORTED_PROVIDERS or provider != settings.name:
        raise UnknownProvider(details=provider)
    return ProviderClient(settings, http)


def get_account_store(session: Session = Depends(get_session)) -> SQLAccountStore:
    return SQLAccountStore(session)


def get_identity_admin(session: Session = Depends(get_session)) -> LocalIdentityAdmin:
    return LocalIdentityAdmin(session)


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    return TokenCodec(config.SECRET_KEY)


def issue_session_cookie(response: Response, account: Account, codec: TokenCodec) -> None:
    token = codec.encode(
        SessionData.from_account(account),
        purpose=SESSION_PURPOSE,
        max_age=config.SESSION_MAX_AGE,
    )
    set_cookie(response, config.SESSION_COOKIE, token, config.SESSION_MAX_AGE)


def issue_temp_session_cookie(
    response: Response, temp_data: TemporaryAuthData, codec: TokenCodec
) -> None:
    token = codec.encode(
        temp_data,
        purpose=TEMP_SESSION_PURPOSE,
        max_age=config.TEMP_SESSION_MAX_AGE,
    )
    set_cookie(response, config.TEMP_SESSION_COOKIE, token, config.TEMP_SESSION_MAX_AGE)


def set_cookie(response: Response, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
        domain=config.COOKIE_DOMAIN,
        path="/",
    )


def clear_cookie(response: Response, name: str) -> None:
    response.delete_cookie(
        name,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
        domain=config.COOKIE_DOMAIN,
        path="/",
    )


__all__ = [
    "SUPPORTED_PROVIDERS",
    "clear_cookie",
    "get_account_store",
    "get_http_client",
    "get_identity_admin",
    "get_provider_client",
    "get_provider_settings",
    "get_token_codec",
    "issue_session_cookie",
    "issue_temp_session_cookie",
    "read_json_body",
    "set_cookie",
]
