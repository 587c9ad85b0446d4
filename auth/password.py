"""
Password hashing and verification.

Uses bcrypt: every hash gets a fresh random salt, and the work factor is
taken from ``config.bcrypt_rounds`` unless a hasher is built explicitly.
"""

from __future__ import annotations

from typing import Optional

import bcrypt

from config.settings import config


class PasswordHasher:
    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds if rounds is not None else config.bcrypt_rounds

    def hash(self, secret: str) -> str:
        """Hash ``secret`` with a new salt (non-deterministic output)."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(secret.encode("utf-8"), salt).decode("utf-8")

    def verify(self, secret: Optional[str], password_hash: Optional[str]) -> bool:
        """
        Constant-time check of ``secret`` against a stored bcrypt hash.

        Returns False for a wrong password, a missing secret, or a malformed
        hash; never raises.
        """
        if not secret or not password_hash:
            return False
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False
