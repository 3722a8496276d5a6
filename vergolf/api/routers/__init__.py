"""Aggregate API routers."""

from fastapi import APIRouter

from .oauth import router as oauth_router
from .onboarding import router as onboarding_router
from .session import router as session_router
from .system import router as system_router

# The fixed /oauth/... paths must be registered before /oauth/{provider}.
ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    session_router,
    onboarding_router,
    oauth_router,
)

__all__ = ["ALL_ROUTERS"]
