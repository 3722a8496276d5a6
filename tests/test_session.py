"""
Session handler: GET and DELETE /oauth/session, POST /oauth/mock.
"""
from __future__ import annotations

import pytest
from sqlmodel import Session

from _helpers import is_cleared, load, set_cookie_headers
from vergolf.api import deps
from vergolf.core import config
from vergolf.core.errors import IdentityError, StoreQueryFailed
from vergolf.models import AuthIdentity, SessionData
from vergolf.services import SESSION_PURPOSE

pytestmark = pytest.mark.anyio("asyncio")


def _session_token(account) -> str:
    return deps.get_token_codec().encode(
        SessionData.from_account(account),
        purpose=SESSION_PURPOSE,
        max_age=config.SESSION_MAX_AGE,
    )


class FailingIdentityAdmin:
    def get_identity(self, identity_id):
        raise IdentityError()

    def sign_out(self, identity_id):
        raise IdentityError("Failed to sign out")


@pytest.mark.anyio
async def test_no_cookies_means_no_session(client):
    r = await client.get("/oauth/session")
    assert r.status_code == 200
    assert r.json() == {"session": None, "type": "none"}


@pytest.mark.anyio
async def test_authenticated_session_is_stable(client, seed_account):
    account = seed_account(role="course_owner", name="Prasert")
    client.cookies.set(config.SESSION_COOKIE, _session_token(account))

    first = await client.get("/oauth/session")
    second = await client.get("/oauth/session")

    assert first.json() == {
        "session": {
            "id": str(account.id),
            "email": account.email,
            "role": "course_owner",
            "name": "Prasert",
        },
        "type": "authenticated",
    }
    assert second.json() == first.json()
    assert set_cookie_headers(second) == {}


@pytest.mark.anyio
async def test_tampered_session_cookie_is_ignored(client, seed_account):
    token = _session_token(seed_account())
    client.cookies.set(config.SESSION_COOKIE, token[:-2] + "zz")
    r = await client.get("/oauth/session")
    assert r.json()["type"] == "none"


@pytest.mark.anyio
async def test_temp_session_token_is_not_a_session(client):
    token = deps.get_token_codec().encode(
        SessionData(id="x", email="a@example.com", role="golfer"),
        purpose="vergolf.temp-session",
        max_age=60,
    )
    client.cookies.set(config.SESSION_COOKIE, token)
    r = await client.get("/oauth/session")
    assert r.json()["type"] == "none"


@pytest.mark.anyio
async def test_deleted_identity_invalidates_session(client, engine, seed_account):
    account = seed_account()
    with Session(engine) as session:
        session.delete(session.get(AuthIdentity, account.id))
        session.commit()
    client.cookies.set(config.SESSION_COOKIE, _session_token(account))

    r = await client.get("/oauth/session")

    assert r.json() == {"session": None, "type": "none"}


@pytest.mark.anyio
async def test_mock_session_fallback_outside_production(client):
    await client.post("/oauth/mock", json={"email": "dev@example.com", "role": "caddy"})
    r = await client.get("/oauth/session")
    assert r.json() == {
        "session": {"email": "dev@example.com", "role": "caddy"},
        "type": "mock",
    }


@pytest.mark.anyio
async def test_mock_session_ignored_in_production(client, monkeypatch):
    await client.post("/oauth/mock", json={"email": "dev@example.com"})
    monkeypatch.setattr(config, "IS_PRODUCTION", True)
    r = await client.get("/oauth/session")
    assert r.json()["type"] == "none"


@pytest.mark.anyio
async def test_mock_login_disabled_in_production(client, monkeypatch):
    monkeypatch.setattr(config, "IS_PRODUCTION", True)
    r = await client.post("/oauth/mock", json={"email": "dev@example.com"})
    assert r.status_code == 404
    assert config.MOCK_SESSION_COOKIE not in set_cookie_headers(r)


@pytest.mark.anyio
async def test_lookup_failure_reports_error_type(client, test_app, seed_account):
    class BrokenStore:
        def get_by_id(self, account_id):
            raise StoreQueryFailed()

    test_app.dependency_overrides[deps.get_account_store] = lambda: BrokenStore()
    client.cookies.set(config.SESSION_COOKIE, _session_token(seed_account()))

    r = await client.get("/oauth/session")

    assert r.status_code == 200
    assert r.json() == {"session": None, "type": "error", "error": "Failed to get session"}


@pytest.mark.anyio
async def test_sign_out_clears_all_cookies(client, engine, seed_account):
    account = seed_account()
    client.cookies.set(config.SESSION_COOKIE, _session_token(account))
    await client.post("/oauth/mock", json={"email": "dev@example.com"})

    r = await client.delete("/oauth/session")

    assert r.status_code == 200
    assert r.json() == {"success": True}
    cookies = set_cookie_headers(r)
    assert is_cleared(cookies.get(config.SESSION_COOKIE))
    assert is_cleared(cookies.get(config.MOCK_SESSION_COOKIE))
    assert is_cleared(cookies.get(config.TEMP_SESSION_COOKIE))
    assert load(engine, AuthIdentity, account.id).signed_out_at is not None


@pytest.mark.anyio
async def test_sign_out_without_session_still_clears(client):
    r = await client.delete("/oauth/session")
    assert r.json() == {"success": True}
    cookies = set_cookie_headers(r)
    assert is_cleared(cookies.get(config.SESSION_COOKIE))
    assert is_cleared(cookies.get(config.MOCK_SESSION_COOKIE))


@pytest.mark.anyio
async def test_upstream_sign_out_failure_is_500_but_clears(client, test_app, seed_account):
    test_app.dependency_overrides[deps.get_identity_admin] = lambda: FailingIdentityAdmin()
    client.cookies.set(config.SESSION_COOKIE, _session_token(seed_account()))

    r = await client.delete("/oauth/session")

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Failed to sign out"}
    cookies = set_cookie_headers(r)
    assert is_cleared(cookies.get(config.SESSION_COOKIE))
    assert is_cleared(cookies.get(config.MOCK_SESSION_COOKIE))


@pytest.mark.anyio
async def test_session_token_is_refused_after_sign_out(client, seed_account):
    token = _session_token(seed_account())
    client.cookies.set(config.SESSION_COOKIE, token)

    r = await client.delete("/oauth/session")
    assert r.json() == {"success": True}

    # Replay the same token even though the response cleared it.
    client.cookies.clear()
    client.cookies.set(config.SESSION_COOKIE, token)
    r = await client.get("/oauth/session")

    assert r.json() == {"session": None, "type": "none"}


@pytest.mark.anyio
async def test_session_issued_after_sign_out_is_accepted(client, seed_account):
    account = seed_account()
    client.cookies.set(config.SESSION_COOKIE, _session_token(account))
    await client.delete("/oauth/session")

    client.cookies.clear()
    client.cookies.set(config.SESSION_COOKIE, _session_token(account))
    r = await client.get("/oauth/session")

    assert r.json()["type"] == "authenticated"
    assert r.json()["session"]["id"] == str(account.id)
