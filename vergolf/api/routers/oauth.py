"""AIVerID OAuth routes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from ...core import config, utcnow
from ...core.errors import AuthFlowError, UnknownProvider
from ...services import (
    AccountStore,
    LoginResult,
    ProviderClient,
    ProviderSettings,
    TokenCodec,
    exchange_and_link,
)
from ..deps import (
    SUPPORTED_PROVIDERS,
    clear_cookie,
    get_account_store,
    get_provider_client,
    get_provider_settings,
    get_token_codec,
    issue_session_cookie,
    issue_temp_session_cookie,
    read_json_body,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])

_STATE_KEY = "oauth_state"


def _apply_login_cookies(response: Response, result: LoginResult, codec: TokenCodec) -> None:
    if result.account is not None:
        issue_session_cookie(response, result.account, codec)
        clear_cookie(response, config.TEMP_SESSION_COOKIE)
    else:
        issue_temp_session_cookie(response, result.temp_data, codec)


def _login_redirect(error: str) -> RedirectResponse:
    return RedirectResponse(f"{config.FRONTEND_ORIGIN}/login?error={error}", status_code=302)


@router.get("/oauth/{provider}/authorize")
def oauth_authorize(
    request: Request, client: ProviderClient = Depends(get_provider_client)
):
    """Send the browser to the provider's consent screen."""

    url, state = client.authorization_url()
    request.session[_STATE_KEY] = state
    return RedirectResponse(url, status_code=302)


@router.get("/oauth/{provider}/callback")
async def oauth_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    client: ProviderClient = Depends(get_provider_client),
    store: AccountStore = Depends(get_account_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Browser-facing landing route for the provider redirect."""

    expected_state = request.session.pop(_STATE_KEY, None)
    if error:
        logger.warning("OAuth error from provider: %s", error)
        return _login_redirect("oauth_cancelled")
    if not code:
        return _login_redirect("no_code")
    if not expected_state or state != expected_state:
        logger.warning("OAuth state mismatch")
        return _login_redirect("oauth_failed")

    try:
        result = await exchange_and_link(code, client, store)
    except Exception:
        logger.exception("Sign in error")
        return _login_redirect("oauth_failed")

    response = RedirectResponse(
        f"{config.FRONTEND_ORIGIN}{result.redirect_to}", status_code=302
    )
    _apply_login_cookies(response, result, codec)
    return response


@router.get("/oauth/{provider}")
def oauth_status(
    provider: str, settings: ProviderSettings = Depends(get_provider_settings)
):
    """Report whether the provider integration is configured."""

    if provider not in SUPPORTED_PROVIDERS:
        raise UnknownProvider(details=provider)
    return {
        "status": f"{settings.name} OAuth endpoint is running",
        "timestamp": utcnow().isoformat(),
        "configured": {
            "hasClientId": bool(settings.client_id),
            "hasClientSecret": bool(settings.client_secret),
            "hasTokenUrl": bool(settings.token_url),
            "hasUserinfoUrl": bool(settings.userinfo_url),
        },
    }


@router.post("/oauth/{provider}")
async def oauth_exchange(
    request: Request,
    client: ProviderClient = Depends(get_provider_client),
    store: AccountStore = Depends(get_account_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Exchange an authorization code for a session or onboarding data."""

    try:
        body = await read_json_body(request)
        result = await exchange_and_link(body.get("code"), client, store)
    except AuthFlowError:
        raise
    except Exception as exc:
        logger.exception("%s OAuth error", client.settings.name)
        raise AuthFlowError("Authentication failed", details=str(exc)) from exc

    response = JSONResponse(result.to_dict())
    _apply_login_cookies(response, result, codec)
    return response


__all__ = ["router"]
