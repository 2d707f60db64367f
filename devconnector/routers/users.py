"""
FastAPI router for user registration.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from devconnector.dependencies import get_auth_service
from devconnector.schemas.auth import RegisterRequest, TokenResponse
from devconnector.services.auth.auth_service import AuthService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenResponse)
async def register(
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Register a new user and get a session token.
    """
    token = await auth_service.register(body.name, body.email, body.password)
    return {"token": token}
