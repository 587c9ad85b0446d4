"""
Domain errors raised by the auth layer.

Each error carries the HTTP status and client-facing message it maps to;
``main.create_app`` registers a single handler that renders them as JSON.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AuthError(Exception):
    """Base class for every error the auth layer reports to clients."""

    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class DuplicateAccount(AuthError):
    status_code = 400
    message = "User already exists"


class AccountNotFound(AuthError):
    status_code = 400
    message = "User not found"


class InvalidCredentials(AuthError):
    status_code = 400
    message = "Invalid password"


class InternalError(AuthError):
    """Catch-all for storage / serialization faults."""

    status_code = 500
    message = "Server error"

    def __init__(self, error: str) -> None:
        super().__init__()
        self.error = error

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.error}


# ── Token errors ─────────────────────────────────────────────────────────


class TokenError(AuthError):
    status_code = 403
    message = "Invalid token"


class MissingTokenError(TokenError):
    status_code = 401
    message = "Missing Bearer token"


class InvalidTokenError(TokenError):
    message = "Invalid token"


class ExpiredTokenError(TokenError):
    message = "Token expired"
