"""Shared assertions and lookups for the API tests."""
from __future__ import annotations

import uuid
from typing import Dict, Optional

import httpx
from sqlmodel import Session, select


def count_rows(engine, model) -> int:
    with Session(engine) as session:
        return len(session.exec(select(model)).all())


def load(engine, model, key: uuid.UUID):
    with Session(engine) as session:
        return session.get(model, key)


def set_cookie_headers(response: httpx.Response) -> Dict[str, str]:
    """Map cookie name to its raw Set-Cookie header."""

    headers: Dict[str, str] = {}
    for raw in response.headers.get_list("set-cookie"):
        name = raw.split("=", 1)[0].strip()
        headers[name] = raw
    return headers


def is_cleared(header: Optional[str]) -> bool:
    return header is not None and "Max-Age=0" in header
