"""
Account record and request / response schemas for the auth API.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BCRYPT_MAX_BYTES = 72


class Account(BaseModel):
    """
    One stored identity.

    The bcrypt hash is persisted under the ``password`` key, replacing the
    plaintext field of the same name.  Any extra profile fields submitted at
    signup are kept verbatim.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    email: str
    username: str
    password_hash: str = Field(..., alias="password", min_length=1)

    def to_record(self) -> Dict[str, Any]:
        """Serialisable form written to the credential store."""
        return self.model_dump(by_alias=True)


# ── Request / response schemas ─────────────────────────────────────────


class SignupRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., min_length=3, max_length=255)
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return v

    def profile_fields(self) -> Dict[str, Any]:
        """Everything submitted besides the credentials themselves."""
        extra = dict(self.model_extra or {})
        for reserved in ("id", "password_hash"):
            extra.pop(reserved, None)
        return extra


class LoginRequest(BaseModel):
    identifier: Optional[str] = None
    password: Optional[str] = None


class AuthResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    token: str
    user_id: str = Field(..., alias="userId")


class ProtectedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: str = Field(..., alias="userId")
