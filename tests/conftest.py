"""
Pytest configuration for the API tests.

The provider is an ``httpx.MockTransport`` handler, the database an in-memory
SQLite engine shared through ``StaticPool``; both are wired in through
FastAPI dependency overrides.
"""
from __future__ import annotations

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any, List, Optional  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from vergolf.api import deps  # noqa: E402
from vergolf.app import app  # noqa: E402
from vergolf.core import get_session  # noqa: E402
from vergolf.models import Account, AuthIdentity  # noqa: E402
from vergolf.services import ProviderSettings  # noqa: E402

AUTH_URL = "https://id.aiverid.test/oauth/authorize"
TOKEN_URL = "https://id.aiverid.test/oauth/token"
USERINFO_URL = "https://id.aiverid.test/oauth/userinfo"


class FakeProvider:
    """MockTransport handler standing in for the AIVerID endpoints."""

    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self.token_status = 200
        self.token_body: Any = {"access_token": "at-123", "token_type": "Bearer"}
        self.userinfo_status = 200
        self.userinfo_body: Any = {
            "aiverid": "AIV-1001",
            "email": "somchai@example.com",
            "name": "Somchai",
            "verified": True,
        }
        self.network_error = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.network_error:
            raise httpx.ConnectError("connection refused", request=request)
        if str(request.url) == TOKEN_URL:
            return httpx.Response(self.token_status, json=self.token_body)
        if str(request.url) == USERINFO_URL:
            return httpx.Response(self.userinfo_status, json=self.userinfo_body)
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def provider_settings() -> ProviderSettings:
    return ProviderSettings(
        name="aiverid",
        client_id="vergolf-test",
        client_secret="s3cret",
        auth_url=AUTH_URL,
        token_url=TOKEN_URL,
        userinfo_url=USERINFO_URL,
        redirect_uri="http://localhost:3000/oauth/callback",
    )


@pytest.fixture
def test_app(engine, provider, provider_settings):
    def _session_override():
        with Session(engine) as session:
            yield session

    async def _http_override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(provider)) as client:
            yield client

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[deps.get_http_client] = _http_override
    app.dependency_overrides[deps.get_provider_settings] = lambda: provider_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    async with httpx.AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test"
    ) as c:
        yield c


@pytest.fixture
def seed_account(engine):
    """Insert an identity plus account and return the account."""

    def _seed(
        *,
        aiverid: Optional[str] = "AIV-1001",
        email: str = "somchai@example.com",
        role: str = "golfer",
        name: str = "Somchai Jaidee",
    ) -> Account:
        with Session(engine) as session:
            identity = AuthIdentity(email=email)
            session.add(identity)
            session.commit()
            session.refresh(identity)
            account = Account(
                id=identity.id, aiverid=aiverid, email=email, name=name, role=role
            )
            session.add(account)
            session.commit()
            session.refresh(account)
            session.expunge(account)
            return account

    return _seed
