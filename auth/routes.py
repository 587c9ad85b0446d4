"""
Auth API routes — signup, login, protected.

Route prefix: /api
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_auth_service, get_current_user_id
from auth.models import AuthResult, LoginRequest, ProtectedResponse, SignupRequest
from auth.service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResult:
    """Register a new user."""
    return await service.signup(req)


@router.post("/login", response_model=AuthResult)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResult:
    """Login with email or username + password."""
    return await service.login(req)


@router.get("/protected", response_model=ProtectedResponse)
async def protected(user_id: str = Depends(get_current_user_id)) -> ProtectedResponse:
    return ProtectedResponse(message="This is a protected route", user_id=user_id)
