"""
FastAPI authentication dependencies.

Provides a factory that builds the auth guard for protected routes.
The token is read from a dedicated header (``x-auth-token`` by default),
sent raw without an ``Authorization: Bearer`` scheme.

Example:
    from common.auth import JWTTokenService, create_auth_dependency

    tokens = JWTTokenService(secret="your-secret")
    require_user_id = create_auth_dependency(lambda: tokens)

    @app.get("/api/profile/me")
    async def get_profile(user_id: str = Depends(require_user_id)):
        return {"user_id": user_id}
"""

from typing import Callable

from fastapi import Request

from common.auth.base import TokenProvider
from common.utils.exceptions import UnauthorizedException

DEFAULT_HEADER_NAME = "x-auth-token"


def create_auth_dependency(
    get_token_provider: Callable[[], TokenProvider],
    header_name: str = DEFAULT_HEADER_NAME,
):
    """
    Factory to create the FastAPI auth guard dependency.

    Args:
        get_token_provider: Callable that returns the TokenProvider instance
        header_name: Header to extract the raw token from

    Returns:
        A FastAPI dependency that resolves the caller's user ID and stores
        it on ``request.state.user_id``
    """

    async def get_current_user_id(request: Request) -> str:
        """
        Extract and verify the caller's user ID.

        Raises:
            UnauthorizedException 401: If the token is missing, invalid, or expired
        """
        token = request.headers.get(header_name)

        if not token:
            raise UnauthorizedException(
                message="No token, authorization denied",
                code="NO_TOKEN",
            )

        user_id = get_token_provider().verify(token)

        if not user_id:
            raise UnauthorizedException(
                message="Token is not valid",
                code="INVALID_TOKEN",
            )

        request.state.user_id = user_id
        return user_id

    return get_current_user_id
