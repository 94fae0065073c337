"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
The payload carries ``sub`` (the user's email), ``iat`` and ``exp``.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Callable

from utils.errors import InvalidToken


class TokenIssuer:
    """Mint and check signed, time-bounded bearer tokens."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = secret.encode()
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, subject: str) -> str:
        """Create a signed token for ``subject`` that expires after the configured TTL."""
        issued_at = int(self._clock())
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> str:
        """
        Verify token and return its subject.

        Raises ``InvalidToken`` on bad format, bad signature or expiry.
        """
        try:
            encoded, sig = token.split(".", 1)
            raw = urlsafe_b64decode(encoded.encode())
            if not hmac.compare_digest(sig, self._sign(raw)):
                raise ValueError("bad signature")
            payload = json.loads(raw)
            if self._clock() >= payload["exp"]:
                raise ValueError("token expired")
            return payload["sub"]
        except (ValueError, KeyError, TypeError) as exc:
            raise InvalidToken() from exc
