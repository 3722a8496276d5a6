"""Auth identity administration.

An identity is the login principal an Account row is keyed by. Onboarding
creates one before inserting the Account and deletes it again when the
insert fails, so no identity outlives a failed onboarding.
"""

from __future__ import annotations

import logging
import uuid
from datetime import timezone
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from ..core.errors import IdentityError
from ..core.time import utcnow
from ..models import AuthIdentity

logger = logging.getLogger(__name__)


def signed_out_since(identity: AuthIdentity, issued_at: float) -> bool:
    """True when ``identity`` signed out at or after ``issued_at`` (epoch seconds)."""

    stamp = identity.signed_out_at
    if stamp is None:
        return False
    # SQLite hands datetimes back without a zone; they are stored as UTC.
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.timestamp() >= issued_at


class IdentityAdmin(Protocol):
    def create_identity(self, email: str, metadata: Dict[str, Any]) -> uuid.UUID: ...

    def delete_identity(self, identity_id: uuid.UUID) -> None: ...

    def get_identity(self, identity_id: uuid.UUID) -> Optional[AuthIdentity]: ...

    def sign_out(self, identity_id: uuid.UUID) -> None: ...


class LocalIdentityAdmin:
    """:class:`IdentityAdmin` storing identities in the application database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_identity(self, email: str, metadata: Dict[str, Any]) -> uuid.UUID:
        normalized = (email or "").strip().lower()
        if not normalized:
            raise IdentityError("Failed to create auth user", details="email is required")
        try:
            existing = self.session.exec(
                select(AuthIdentity).where(func.lower(AuthIdentity.email) == normalized)
            ).first()
            if existing:
                raise IdentityError(
                    "Failed to create auth user",
                    details="an identity with this email already exists",
                )
            identity = AuthIdentity(email=normalized, user_metadata=dict(metadata))
            self.session.add(identity)
            self.session.commit()
            self.session.refresh(identity)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Auth creation error: %s", exc)
            raise IdentityError("Failed to create auth user") from exc
        logger.info("Created auth identity %s", identity.id)
        return identity.id

    def delete_identity(self, identity_id: uuid.UUID) -> None:
        try:
            identity = self.session.get(AuthIdentity, identity_id)
            if identity:
                self.session.delete(identity)
                self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Failed to delete auth identity %s: %s", identity_id, exc)
            raise IdentityError("Failed to delete auth user") from exc
        logger.info("Deleted auth identity %s", identity_id)

    def get_identity(self, identity_id: uuid.UUID) -> Optional[AuthIdentity]:
        try:
            return self.session.get(AuthIdentity, identity_id)
        except SQLAlchemyError as exc:
            logger.error("Identity lookup failed: %s", exc)
            raise IdentityError() from exc

    def sign_out(self, identity_id: uuid.UUID) -> None:
        try:
            identity = self.session.get(AuthIdentity, identity_id)
            if not identity:
                return
            identity.signed_out_at = utcnow()
            self.session.add(identity)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Sign out failed for %s: %s", identity_id, exc)
            raise IdentityError("Failed to sign out") from exc


__all__ = ["IdentityAdmin", "LocalIdentityAdmin", "signed_out_since"]
