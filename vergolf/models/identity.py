"""Database model for locally managed auth identities."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from ..core.time import utcnow


class AuthIdentity(SQLModel, table=True):
    """Login identity that an Account row hangs off."""

    __tablename__ = "auth_identity"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    email: str = Field(index=True, unique=True)
    user_metadata: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    email_confirmed: bool = True
    signed_out_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


__all__ = ["AuthIdentity"]
