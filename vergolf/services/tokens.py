"""Signed cookie tokens with an explicit schema and expiry.

Every cookie the API issues is a :class:`TokenCodec` token: the payload model
is dumped to JSON, wrapped together with an ``expires`` timestamp and signed
with the application secret. The envelope also records ``issued_at`` so a
session can be refused when its identity signed out after it was minted.
Each cookie kind uses its own salt so a token minted for one cookie is never
accepted for another.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple, Type, TypeVar

from itsdangerous import BadSignature, URLSafeTimedSerializer
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

SESSION_PURPOSE = "vergolf.session"
TEMP_SESSION_PURPOSE = "vergolf.temp-session"
MOCK_SESSION_PURPOSE = "vergolf.mock-session"

ModelT = TypeVar("ModelT", bound=BaseModel)


class TokenCodec:
    """Encode and validate signed, expiring cookie payloads."""

    def __init__(self, secret_key: str) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key)

    def encode(self, payload: BaseModel, *, purpose: str, max_age: int) -> str:
        now = time.time()
        envelope = {
            "data": payload.model_dump(mode="json"),
            "issued_at": now,
            "expires": int(now) + max_age,
        }
        return self._serializer.dumps(envelope, salt=purpose)

    def decode(
        self,
        token: Optional[str],
        model: Type[ModelT],
        *,
        purpose: str,
        max_age: int,
    ) -> Optional[ModelT]:
        """Return the payload, or ``None`` when the token is unusable."""

        decoded = self.decode_with_issued_at(
            token, model, purpose=purpose, max_age=max_age
        )
        return decoded[0] if decoded else None

    def decode_with_issued_at(
        self,
        token: Optional[str],
        model: Type[ModelT],
        *,
        purpose: str,
        max_age: int,
    ) -> Optional[Tuple[ModelT, float]]:
        """Like :meth:`decode`, also returning the epoch time the token was minted."""

        if not token:
            return None
        try:
            envelope = self._serializer.loads(token, salt=purpose, max_age=max_age)
        except BadSignature:
            logger.debug("Rejected %s token with bad signature or age", purpose)
            return None
        if not isinstance(envelope, dict):
            return None
        expires = envelope.get("expires")
        if not isinstance(expires, int) or expires <= int(time.time()):
            return None
        issued_at = envelope.get("issued_at")
        if not isinstance(issued_at, (int, float)):
            return None
        try:
            payload = model.model_validate(envelope.get("data"))
        except ValidationError:
            logger.debug("Rejected %s token with unexpected payload", purpose)
            return None
        return payload, float(issued_at)


__all__ = [
    "MOCK_SESSION_PURPOSE",
    "SESSION_PURPOSE",
    "TEMP_SESSION_PURPOSE",
    "TokenCodec",
]
