"""
Custom HTTP exceptions with error codes.

Extends FastAPI's HTTPException with standardized error codes
for consistent API error responses. The application registers a
handler that renders ``exc.detail`` as the response body.

Example:
    from common.utils import NotFoundException

    @app.get("/profile/user/{user_id}")
    async def get_profile(user_id: str):
        profile = await profiles.find_one({"user": ObjectId(user_id)})
        if not profile:
            raise NotFoundException("Profile not found", code="PROFILE_NOT_FOUND")
        return profile
"""

from typing import Optional, Any, Dict, List
from fastapi import HTTPException

from common.utils.responses import error_response


class APIException(HTTPException):
    """
    Base API exception with error code support.

    Provides consistent error response format across the API.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            errors: Field-level errors (validation failures)
            headers: Optional response headers
        """
        self.message = message
        self.code = code

        super().__init__(
            status_code=status_code,
            detail=error_response(message, code=code, errors=errors),
            headers=headers,
        )


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid authentication."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
    ):
        super().__init__(401, message, code)


class NotFoundException(APIException):
    """
    Requested resource doesn't exist.

    Reported as 400 rather than 404: existing clients branch on 400 for
    "no profile yet", so every not-found in this API uses it.
    """

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
    ):
        super().__init__(400, message, code)


class ValidationException(APIException):
    """400 Validation Error - Request validation failed."""

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(400, message, code, errors)

    @classmethod
    def single(cls, msg: str, param: Optional[str] = None) -> "ValidationException":
        """Build a validation error carrying one message."""
        error: Dict[str, Any] = {"msg": msg}
        if param:
            error["param"] = param
            error["location"] = "body"
        return cls(errors=[error], message=msg)
