"""
Auth API routes — register, login.

Route prefix: /api/v1
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service
from auth.service import AuthService
from utils.schemas import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    req: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """Register a new user."""
    await auth.register(req.name, req.email, req.password)
    return RegisterResponse()


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with email + password."""
    token = await auth.login(req.email, req.password)
    return LoginResponse(token=token)
