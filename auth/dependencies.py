"""
FastAPI dependencies for authentication.

Provides ``get_auth_service`` and ``get_current_user_id``, the latter
guarding protected routes with a Bearer token.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.errors import MissingTokenError
from auth.service import AuthService

_bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    """The service instance built by ``main.create_app``."""
    return request.app.state.auth_service


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    service: AuthService = Depends(get_auth_service),
) -> str:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id.  No token → 401; bad or expired token → 403.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    return service.authenticate(credentials.credentials)
