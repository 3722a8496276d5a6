"""Account persistence behind a small store interface."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import StoreQueryFailed
from ..models import ROLE_FIELDS, Account, ProfileForm

logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    def get_by_id(self, account_id: uuid.UUID) -> Optional[Account]: ...

    def get_by_aiverid(self, aiverid: str) -> Optional[Account]: ...

    def insert(self, account: Account) -> Account: ...


class SQLAccountStore:
    """:class:`AccountStore` backed by a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, account_id: uuid.UUID) -> Optional[Account]:
        try:
            return self.session.get(Account, account_id)
        except SQLAlchemyError as exc:
            logger.error("Account lookup by id failed: %s", exc)
            raise StoreQueryFailed() from exc

    def get_by_aiverid(self, aiverid: str) -> Optional[Account]:
        try:
            return self.session.exec(
                select(Account).where(Account.aiverid == aiverid)
            ).first()
        except SQLAlchemyError as exc:
            logger.error("Account lookup by aiverid failed: %s", exc)
            raise StoreQueryFailed() from exc

    def insert(self, account: Account) -> Account:
        try:
            self.session.add(account)
            self.session.commit()
            self.session.refresh(account)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Account insert failed: %s", exc)
            raise StoreQueryFailed(details=str(exc.__cause__ or exc)) from exc
        return account


def account_from_form(
    identity_id: uuid.UUID,
    form: ProfileForm,
    *,
    email: str,
    aiverid: Optional[str],
) -> Account:
    """Build a new Account from the onboarding form.

    Only the role-specific fields belonging to ``form.role`` are copied.
    """

    role_values = {field: getattr(form, field) for field in ROLE_FIELDS[form.role]}
    return Account(
        id=identity_id,
        aiverid=aiverid,
        email=email,
        name=form.name.strip(),
        phone=form.phone.strip(),
        role=form.role,
        is_verified=False,
        is_active=True,
        **role_values,
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Serialise an account to an API-friendly dict."""

    return {
        "id": str(account.id),
        "aiverid": account.aiverid,
        "email": account.email,
        "name": account.name,
        "phone": account.phone,
        "role": account.role,
        "handicap": account.handicap,
        "experience_years": account.experience_years,
        "languages": account.languages,
        "hourly_rate": account.hourly_rate,
        "certification": account.certification,
        "teaching_experience": account.teaching_experience,
        "specialties": account.specialties,
        "lesson_rate": account.lesson_rate,
        "is_verified": account.is_verified,
        "is_active": account.is_active,
        "created_at": account.created_at.isoformat() if account.created_at else None,
        "updated_at": account.updated_at.isoformat() if account.updated_at else None,
    }


__all__ = ["AccountStore", "SQLAccountStore", "account_from_form", "account_to_dict"]
