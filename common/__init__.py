"""
Common library for reusable infrastructure components.

- database: Async MongoDB connection with Motor
- auth: JWT session tokens, bcrypt hashing, header-based auth guard
- utils: Standard error responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import (
    TokenProvider,
    PasswordHasher,
    JWTTokenService,
    BcryptPasswordHasher,
    create_auth_dependency,
)
from common.utils import (
    error_response,
    APIException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "TokenProvider",
    "PasswordHasher",
    "JWTTokenService",
    "BcryptPasswordHasher",
    "create_auth_dependency",
    # Utils
    "error_response",
    "APIException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
    # Config
    "BaseAppSettings",
]
