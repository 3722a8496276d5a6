"""Typed payloads exchanged with the provider and carried in cookies."""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .account import Account

Role = Literal["golfer", "caddy", "pro", "course_owner"]


class ProviderProfile(BaseModel):
    """User-info document returned by AIVerID."""

    model_config = ConfigDict(extra="allow")

    aiverid: Optional[Union[str, int]] = None
    email: Optional[str] = None
    name: Optional[str] = None
    verified: Optional[bool] = None


class TemporaryAuthData(BaseModel):
    """Provider identity held between code exchange and onboarding."""

    aiverid: str
    email: str
    name: str = ""
    verified: bool = False

    @classmethod
    def from_profile(cls, profile: ProviderProfile) -> "TemporaryAuthData":
        return cls(
            aiverid=str(profile.aiverid),
            email=str(profile.email),
            name=profile.name or "",
            verified=bool(profile.verified),
        )


class SessionData(BaseModel):
    id: str
    email: str
    role: str
    name: str = ""

    @classmethod
    def from_account(cls, account: Account) -> "SessionData":
        return cls(
            id=str(account.id),
            email=account.email,
            role=account.role,
            name=account.name or account.email.split("@")[0],
        )


class MockSession(BaseModel):
    """Free-form development session payload."""

    model_config = ConfigDict(extra="allow")


class ProfileForm(BaseModel):
    """Onboarding wizard submission."""

    name: str = Field(min_length=1, max_length=120)
    phone: str = Field(min_length=1, max_length=40)
    role: Role = Field(
        default="golfer",
        validation_alias=AliasChoices("role", "user_type", "account_type"),
    )
    email: Optional[str] = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+$")

    handicap: Optional[float] = Field(default=None, ge=-10, le=54)
    experience_years: Optional[int] = Field(default=None, ge=0)
    languages: Optional[List[str]] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    certification: Optional[str] = None
    teaching_experience: Optional[int] = Field(default=None, ge=0)
    specialties: Optional[List[str]] = None
    lesson_rate: Optional[float] = Field(default=None, ge=0)


__all__ = [
    "MockSession",
    "ProfileForm",
    "ProviderProfile",
    "Role",
    "SessionData",
    "TemporaryAuthData",
]
