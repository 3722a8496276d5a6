"""Onboarding completion: identity first, then the account row."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from ..core.errors import (
    IdentityError,
    InvalidInput,
    NotAuthenticated,
    ProfileCreationFailed,
)
from ..models import Account, ProfileForm, SessionData, TemporaryAuthData
from .accounts import AccountStore, account_from_form
from .identities import IdentityAdmin

logger = logging.getLogger(__name__)


def complete_onboarding(
    form: ProfileForm,
    *,
    store: AccountStore,
    identities: IdentityAdmin,
    temp_data: Optional[TemporaryAuthData] = None,
    mock_payload: Optional[Dict[str, Any]] = None,
    session: Optional[SessionData] = None,
) -> Account:
    """Create the identity (when missing) and insert the Account.

    If the insert fails, an identity created by this call is deleted again
    before :class:`ProfileCreationFailed` is raised.
    """

    created = False
    metadata: Dict[str, Any] = {"name": form.name, "user_type": form.role}

    if temp_data is not None:
        email = temp_data.email
        aiverid: Optional[str] = temp_data.aiverid
        metadata["aiverid"] = aiverid
        created = True
    elif mock_payload is not None:
        email = form.email or mock_payload.get("email")
        raw_aiverid = mock_payload.get("aiverid")
        aiverid = str(raw_aiverid) if raw_aiverid else None
        created = True
    elif session is not None:
        try:
            identity_id = uuid.UUID(session.id)
        except ValueError as exc:
            raise NotAuthenticated() from exc
        if identities.get_identity(identity_id) is None:
            raise NotAuthenticated()
        if store.get_by_id(identity_id) is not None:
            raise InvalidInput("Profile already exists")
        email = session.email
        aiverid = None
    else:
        raise NotAuthenticated()

    email = (email or "").strip().lower()
    if not email:
        raise InvalidInput("Email is required")

    if created:
        try:
            identity_id = identities.create_identity(email, metadata)
        except IdentityError as exc:
            raise ProfileCreationFailed(details=exc.message) from exc

    try:
        account = account_from_form(identity_id, form, email=email, aiverid=aiverid)
        return store.insert(account)
    except Exception as exc:
        logger.error("Profile creation error for identity %s", identity_id)
        if created:
            try:
                identities.delete_identity(identity_id)
            except IdentityError:
                logger.exception("Rollback of identity %s failed", identity_id)
        raise ProfileCreationFailed(details="Failed to create user profile") from exc


__all__ = ["complete_onboarding"]
