"""Signed cookie token codec."""
from __future__ import annotations

from vergolf.models import SessionData, TemporaryAuthData
from vergolf.services import SESSION_PURPOSE, TEMP_SESSION_PURPOSE, TokenCodec

SESSION = SessionData(id="42", email="a@example.com", role="golfer", name="A")


def test_decodes_what_it_encodes():
    codec = TokenCodec("k1")
    token = codec.encode(SESSION, purpose=SESSION_PURPOSE, max_age=60)
    assert codec.decode(token, SessionData, purpose=SESSION_PURPOSE, max_age=60) == SESSION


def test_rejects_other_secret():
    token = TokenCodec("k1").encode(SESSION, purpose=SESSION_PURPOSE, max_age=60)
    assert TokenCodec("k2").decode(token, SessionData, purpose=SESSION_PURPOSE, max_age=60) is None


def test_rejects_other_purpose():
    codec = TokenCodec("k1")
    token = codec.encode(SESSION, purpose=SESSION_PURPOSE, max_age=60)
    assert codec.decode(token, SessionData, purpose=TEMP_SESSION_PURPOSE, max_age=60) is None


def test_rejects_expired_payload():
    codec = TokenCodec("k1")
    token = codec.encode(SESSION, purpose=SESSION_PURPOSE, max_age=-1)
    assert codec.decode(token, SessionData, purpose=SESSION_PURPOSE, max_age=60) is None


def test_rejects_schema_mismatch():
    codec = TokenCodec("k1")
    token = codec.encode(SESSION, purpose=SESSION_PURPOSE, max_age=60)
    assert codec.decode(token, TemporaryAuthData, purpose=SESSION_PURPOSE, max_age=60) is None


def test_missing_token():
    codec = TokenCodec("k1")
    assert codec.decode(None, SessionData, purpose=SESSION_PURPOSE, max_age=60) is None
    assert codec.decode("", SessionData, purpose=SESSION_PURPOSE, max_age=60) is None
    assert codec.decode("garbage", SessionData, purpose=SESSION_PURPOSE, max_age=60) is None
