"""
FastAPI router for Auth endpoints.

Login and "current user" lookup.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from devconnector.dependencies import CurrentUserId, get_auth_service
from devconnector.schemas.auth import LoginRequest, TokenResponse
from devconnector.services.auth.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("")
async def get_current_user(
    user_id: CurrentUserId,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Get the authenticated user (without the password hash).
    """
    return await auth_service.get_current_user(user_id)


@router.post("", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Authenticate with email and password and get a session token.
    """
    token = await auth_service.login(body.email, body.password)
    return {"token": token}
