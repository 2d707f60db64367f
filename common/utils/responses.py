"""
Standard API response helpers.

Provides consistent response formatting for error cases. Success
responses are the resource itself (profile, user, ``{"token": ...}``),
which is what existing clients consume.

Example:
    from common.utils import error_response

    @app.get("/api/profile/me")
    async def get_profile():
        return JSONResponse(
            status_code=400,
            content=error_response("No profile for this user", code="PROFILE_NOT_FOUND"),
        )
"""

from typing import Any, Optional, Dict, List


def error_response(
    message: str,
    code: Optional[str] = None,
    errors: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Create a standard error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code (e.g., "PROFILE_NOT_FOUND")
        errors: List of field-level errors ({"msg", "param", "location"})

    Returns:
        Dictionary with ``msg`` and optional ``code``/``errors``
    """
    response: Dict[str, Any] = {"msg": message}

    if code:
        response["code"] = code

    if errors:
        response["errors"] = errors

    return response


def validation_errors_from_pydantic(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Flatten pydantic/FastAPI validation errors into field-level messages.

    Custom validators raise ``ValueError("Status is required")``; their
    message is used verbatim instead of pydantic's "Value error, ..." text.
    """
    flattened: List[Dict[str, Any]] = []

    for error in errors:
        loc = list(error.get("loc") or [])
        location = str(loc[0]) if loc else "body"
        param = ".".join(str(part) for part in loc[1:]) if len(loc) > 1 else None

        ctx_error = (error.get("ctx") or {}).get("error")
        msg = str(ctx_error) if ctx_error is not None else error.get("msg", "Invalid value")

        item: Dict[str, Any] = {"msg": msg, "location": location}
        if param:
            item["param"] = param
        flattened.append(item)

    return flattened
