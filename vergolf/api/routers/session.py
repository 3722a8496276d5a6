"""Session lookup, sign-out and the development mock login."""

from __future__ import annotations

import logging
import uuid
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ...core import config
from ...core.errors import IdentityError
from ...models import MockSession, SessionData
from ...services import (
    MOCK_SESSION_PURPOSE,
    SESSION_PURPOSE,
    AccountStore,
    IdentityAdmin,
    TokenCodec,
    signed_out_since,
)
from ..deps import (
    clear_cookie,
    get_account_store,
    get_identity_admin,
    get_token_codec,
    read_json_body,
    set_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])


def read_session_token(
    request: Request, codec: TokenCodec
) -> Optional[Tuple[SessionData, float]]:
    """Return the session payload with the time it was issued."""

    return codec.decode_with_issued_at(
        request.cookies.get(config.SESSION_COOKIE),
        SessionData,
        purpose=SESSION_PURPOSE,
        max_age=config.SESSION_MAX_AGE,
    )


def read_session_cookie(request: Request, codec: TokenCodec) -> Optional[SessionData]:
    decoded = read_session_token(request, codec)
    return decoded[0] if decoded else None


def read_mock_cookie(request: Request, codec: TokenCodec) -> Optional[MockSession]:
    """Return the mock session outside production, otherwise ``None``."""

    if config.IS_PRODUCTION:
        return None
    return codec.decode(
        request.cookies.get(config.MOCK_SESSION_COOKIE),
        MockSession,
        purpose=MOCK_SESSION_PURPOSE,
        max_age=config.SESSION_MAX_AGE,
    )


def _resolve_session(
    session: SessionData,
    issued_at: float,
    store: AccountStore,
    identities: IdentityAdmin,
) -> Optional[SessionData]:
    try:
        identity_id = uuid.UUID(session.id)
    except ValueError:
        return None
    identity = identities.get_identity(identity_id)
    if identity is None or signed_out_since(identity, issued_at):
        return None
    account = store.get_by_id(identity_id)
    if account is None:
        return None
    return SessionData.from_account(account)


@router.get("/oauth/session")
def get_current_session(
    request: Request,
    store: AccountStore = Depends(get_account_store),
    identities: IdentityAdmin = Depends(get_identity_admin),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Return the caller's session, the mock session, or none."""

    try:
        decoded = read_session_token(request, codec)
        if decoded:
            resolved = _resolve_session(*decoded, store, identities)
            if resolved:
                return {"session": resolved.model_dump(), "type": "authenticated"}

        mock = read_mock_cookie(request, codec)
        if mock:
            return {"session": mock.model_dump(), "type": "mock"}

        return {"session": None, "type": "none"}
    except Exception:
        logger.exception("Session check error")
        return {"session": None, "type": "error", "error": "Failed to get session"}


@router.delete("/oauth/session")
def delete_current_session(
    request: Request,
    identities: IdentityAdmin = Depends(get_identity_admin),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Sign out upstream and clear every session cookie."""

    failed = False
    cookie_session = read_session_cookie(request, codec)
    if cookie_session:
        try:
            identities.sign_out(uuid.UUID(cookie_session.id))
        except (IdentityError, ValueError):
            logger.exception("Sign out error")
            failed = True

    if failed:
        response = JSONResponse(
            {"success": False, "error": "Failed to sign out"}, status_code=500
        )
    else:
        response = JSONResponse({"success": True})

    for name in (
        config.SESSION_COOKIE,
        config.TEMP_SESSION_COOKIE,
        config.MOCK_SESSION_COOKIE,
    ):
        clear_cookie(response, name)
    request.session.clear()
    return response


@router.post("/oauth/mock")
async def create_mock_session(
    request: Request, codec: TokenCodec = Depends(get_token_codec)
):
    """Development-only login that stores an arbitrary payload."""

    if config.IS_PRODUCTION:
        raise HTTPException(status_code=404, detail="Not Found")

    payload = MockSession.model_validate(await read_json_body(request))
    token = codec.encode(
        payload, purpose=MOCK_SESSION_PURPOSE, max_age=config.SESSION_MAX_AGE
    )
    response = JSONResponse({"success": True, "session": payload.model_dump()})
    set_cookie(response, config.MOCK_SESSION_COOKIE, token, config.SESSION_MAX_AGE)
    return response


__all__ = ["read_mock_cookie", "read_session_cookie", "read_session_token", "router"]
