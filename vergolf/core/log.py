"""Logging setup for the API process."""

from __future__ import annotations

import logging

from .config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install a single stream handler on the package logger."""

    logger = logging.getLogger("vergolf")
    if any(getattr(h, "_vergolf", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._vergolf = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)


__all__ = ["configure_logging"]
