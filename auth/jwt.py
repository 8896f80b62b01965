"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
The payload embeds a ``UserSnapshot`` plus ``iat`` / ``exp`` timestamps.

Verification never goes back to the database: a token carries the
profile as it was at issue time until it expires, even if the account
changes in the meantime.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Callable, Dict

from pydantic import ValidationError as SchemaError

from utils.schemas import UserSnapshot

DEFAULT_EXPIRY_SECONDS = 86400


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidToken(TokenError):
    """Token is not well formed or its signature does not match."""


class TokenExpired(TokenError):
    """Token signature is valid but ``exp`` has passed."""


class MalformedPayload(TokenError):
    """Signed payload does not contain the expected identity snapshot."""


class TokenSigner:
    """Issues and verifies signed bearer tokens with a fixed secret."""

    def __init__(
        self,
        secret: str,
        expires_in: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("A non-empty signing secret is required")
        self._secret = secret.encode()
        self.expires_in = expires_in
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user: UserSnapshot) -> str:
        """Create a signed token for ``user`` valid for ``expires_in`` seconds."""
        now = int(self._clock())
        payload: Dict[str, Any] = {
            "user": user.to_json(),
            "iat": now,
            "exp": now + self.expires_in,
        }
        raw = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> UserSnapshot:
        """
        Verify token and return the embedded ``UserSnapshot``.

        Raises ``InvalidToken``, ``MalformedPayload`` or ``TokenExpired``.
        """
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidToken("bad format")
        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except (binascii.Error, ValueError) as exc:
            raise InvalidToken("bad encoding") from exc
        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise InvalidToken("bad signature")

        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise MalformedPayload("payload is not JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedPayload("payload is not an object")

        exp = payload.get("exp")
        if not isinstance(exp, int) or not isinstance(payload.get("iat"), int):
            raise MalformedPayload("missing iat/exp")
        if self._clock() >= exp:
            raise TokenExpired("token expired")

        user = payload.get("user")
        if not isinstance(user, dict):
            raise MalformedPayload("user object missing")
        try:
            return UserSnapshot.model_validate(user)
        except SchemaError as exc:
            raise MalformedPayload(f"user object malformed: {exc.error_count()} error(s)") from exc
