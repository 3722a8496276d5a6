"""API assembly helpers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import AuthFlowError
from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


async def auth_flow_error_handler(request: Request, exc: AuthFlowError) -> JSONResponse:
    """Render an :class:`AuthFlowError` as ``{error, details?}``."""

    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def register_routes(app: FastAPI) -> None:
    """Attach the error handler and all application routers to the app."""

    app.add_exception_handler(AuthFlowError, auth_flow_error_handler)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["auth_flow_error_handler", "register_routes"]
