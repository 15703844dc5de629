"""
JWT-style token creation and verification.

Tokens are url-safe base64 JSON payloads signed with HMAC-SHA256::

    base64url({"user_id": ..., "iat": ..., "exp": ...}) + "." + hex(hmac)

The signing secret is injected at construction (``config.jwt_secret`` /
env var ``JWT_SECRET`` in the running app); nothing is stored server-side.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, urlsafe_b64encode
from typing import Callable

from utils.errors import ConfigurationError, InvalidTokenError, TokenExpiredError

DEFAULT_EXPIRY_SECONDS = 3600


class TokenCodec:
    """Mints and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret: str,
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ConfigurationError(
                "JWT_SECRET is not configured; refusing to issue unsigned tokens"
            )
        if expiry_seconds <= 0:
            raise ConfigurationError("jwt_expiry_seconds must be positive")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def mint(self, user_id: str) -> str:
        """Create a signed token containing ``user_id`` and expiry."""
        now = int(self._clock())
        payload = {
            "user_id": str(user_id),
            "iat": now,
            "exp": now + self._expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> str:
        """
        Verify token and return ``user_id``.

        Raises ``InvalidTokenError`` for malformed or tampered tokens and
        ``TokenExpiredError`` once the embedded expiry has passed.
        """
        if not isinstance(token, str):
            raise InvalidTokenError("token must be a string")
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidTokenError("bad format")

        try:
            raw = b64decode(parts[0].encode(), altchars=b"-_", validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("bad encoding") from exc
        if urlsafe_b64encode(raw).decode() != parts[0]:
            raise InvalidTokenError("non-canonical encoding")

        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidTokenError("bad signature")

        try:
            payload = json.loads(raw)
        except (UnicodeDecodeError, ValueError) as exc:
            raise InvalidTokenError("bad payload") from exc

        if not isinstance(payload, dict):
            raise InvalidTokenError("bad payload")
        user_id = payload.get("user_id")
        exp = payload.get("exp")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("missing user_id")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError("missing exp")

        if self._clock() > exp:
            raise TokenExpiredError("token expired")
        return user_id
