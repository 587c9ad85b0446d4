"""
JWT-style session token creation and verification.

Tokens are a URL-safe base64 JSON payload plus a hex HMAC-SHA256 signature
computed over the canonical (sorted-key, compact) payload encoding::

    <payload_b64>.<signature_hex>

The secret is supplied by the caller; ``main.create_app`` reads it from
``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
import uuid
from base64 import urlsafe_b64decode, urlsafe_b64encode
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from auth.errors import ExpiredTokenError, InvalidTokenError

DEFAULT_EXPIRY_SECONDS = 3600


class TokenStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


class TokenCheck(BaseModel):
    """Outcome of ``TokenIssuer.verify``."""

    status: TokenStatus
    user_id: Optional[str] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status is TokenStatus.VALID


def _canonical(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode()


def _b64encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(text: str) -> bytes:
    return urlsafe_b64decode(text + "=" * (-len(text) % 4))


class TokenIssuer:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str) -> str:
        """Create a signed token containing ``user_id`` and expiry."""
        now = int(self._clock())
        payload = {
            "user_id": user_id,
            "iat": now,
            "exp": now + self.expiry_seconds,
            "jti": uuid.uuid4().hex,
        }
        raw = _canonical(payload)
        return _b64encode(raw) + "." + self._sign(raw)

    def verify(self, token: Optional[str]) -> TokenCheck:
        """
        Decode ``token``, check its signature, then its expiry.

        Never raises; failures come back as ``EXPIRED`` or ``INVALID``.
        """
        if not token:
            return TokenCheck(status=TokenStatus.INVALID, reason="empty token")

        parts = token.split(".")
        if len(parts) != 2:
            return TokenCheck(status=TokenStatus.INVALID, reason="bad format")

        try:
            payload = json.loads(_b64decode(parts[0]))
        except (ValueError, TypeError):
            return TokenCheck(status=TokenStatus.INVALID, reason="bad payload")
        if not isinstance(payload, dict):
            return TokenCheck(status=TokenStatus.INVALID, reason="bad payload")

        # Re-sign the canonical form so re-encoded payloads cannot slip through.
        expected_sig = self._sign(_canonical(payload))
        if not hmac.compare_digest(parts[1].encode(), expected_sig.encode()):
            return TokenCheck(status=TokenStatus.INVALID, reason="bad signature")

        user_id = payload.get("user_id")
        exp = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(exp, (int, float)):
            return TokenCheck(status=TokenStatus.INVALID, reason="missing claims")
        if exp <= self._clock():
            return TokenCheck(status=TokenStatus.EXPIRED, user_id=user_id, reason="token expired")

        return TokenCheck(status=TokenStatus.VALID, user_id=user_id)

    def verify_or_raise(self, token: Optional[str]) -> str:
        """
        Verify token and return ``user_id``.

        Raises ``ExpiredTokenError`` or ``InvalidTokenError`` on failure.
        """
        check = self.verify(token)
        if check.ok:
            return check.user_id
        if check.status is TokenStatus.EXPIRED:
            raise ExpiredTokenError()
        raise InvalidTokenError(f"Invalid token: {check.reason}")
