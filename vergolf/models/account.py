"""Database model for golf platform accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

ROLES = ("golfer", "caddy", "pro", "course_owner")

ROLE_ROUTES: Dict[str, str] = {role: f"/dashboard/{role}" for role in ROLES}

# Fields only meaningful for one role; anything else is dropped on insert.
ROLE_FIELDS: Dict[str, tuple[str, ...]] = {
    "golfer": ("handicap",),
    "caddy": ("experience_years", "languages", "hourly_rate"),
    "pro": ("certification", "teaching_experience", "specialties", "lesson_rate"),
    "course_owner": (),
}


def dashboard_path(role: Optional[str]) -> str:
    """Return the dashboard route for a role, defaulting to the golfer one."""

    return ROLE_ROUTES.get(role or "", ROLE_ROUTES["golfer"])


class Account(SQLModel, table=True):
    """Application user record keyed by the auth identity id."""

    id: uuid.UUID = ORMField(primary_key=True, nullable=False)
    aiverid: Optional[str] = ORMField(default=None, index=True, unique=True)
    email: str = ORMField(index=True, unique=True)
    name: str = ""
    phone: Optional[str] = None
    role: str = ORMField(default="golfer")

    handicap: Optional[float] = None
    experience_years: Optional[int] = None
    languages: Optional[List[str]] = ORMField(default=None, sa_column=Column(JSON))
    hourly_rate: Optional[float] = None
    certification: Optional[str] = None
    teaching_experience: Optional[int] = None
    specialties: Optional[List[str]] = ORMField(default=None, sa_column=Column(JSON))
    lesson_rate: Optional[float] = None

    is_verified: bool = False
    is_active: bool = True
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Account", "ROLES", "ROLE_FIELDS", "ROLE_ROUTES", "dashboard_path"]
