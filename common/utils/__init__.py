"""
Utilities module - Common helpers for API error responses and exceptions.
"""

from common.utils.responses import error_response, validation_errors_from_pydantic
from common.utils.exceptions import (
    APIException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)

__all__ = [
    "error_response",
    "validation_errors_from_pydantic",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
]
