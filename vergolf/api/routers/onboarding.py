"""Onboarding completion route."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...core import config
from ...core.errors import AuthFlowError, InvalidInput, ProfileCreationFailed
from ...models import ProfileForm, TemporaryAuthData, dashboard_path
from ...services import (
    TEMP_SESSION_PURPOSE,
    AccountStore,
    IdentityAdmin,
    TokenCodec,
    account_to_dict,
    complete_onboarding,
)
from ..deps import (
    clear_cookie,
    get_account_store,
    get_identity_admin,
    get_token_codec,
    issue_session_cookie,
    read_json_body,
)
from .session import read_mock_cookie, read_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(tags=["onboarding"])


@router.post("/oauth/complete-onboarding")
async def complete_onboarding_route(
    request: Request,
    store: AccountStore = Depends(get_account_store),
    identities: IdentityAdmin = Depends(get_identity_admin),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Create the identity and account from the onboarding wizard."""

    try:
        body = await read_json_body(request)
        try:
            form = ProfileForm.model_validate(body)
        except ValidationError as exc:
            errors = [
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ]
            raise InvalidInput("Invalid profile data", details=errors) from exc

        temp_data = codec.decode(
            request.cookies.get(config.TEMP_SESSION_COOKIE),
            TemporaryAuthData,
            purpose=TEMP_SESSION_PURPOSE,
            max_age=config.TEMP_SESSION_MAX_AGE,
        )
        mock = read_mock_cookie(request, codec)

        account = complete_onboarding(
            form,
            store=store,
            identities=identities,
            temp_data=temp_data,
            mock_payload=mock.model_dump() if mock else None,
            session=read_session_cookie(request, codec),
        )
    except AuthFlowError:
        raise
    except Exception as exc:
        logger.exception("Onboarding error")
        raise ProfileCreationFailed(details=str(exc)) from exc

    response = JSONResponse(
        {
            "success": True,
            "user": account_to_dict(account),
            "redirectUrl": dashboard_path(account.role),
        }
    )
    issue_session_cookie(response, account, codec)
    clear_cookie(response, config.TEMP_SESSION_COOKIE)
    clear_cookie(response, config.MOCK_SESSION_COOKIE)
    return response


__all__ = ["router"]
