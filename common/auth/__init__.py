"""
Authentication module - Session tokens, password hashing and the auth guard.
"""

from common.auth.base import TokenProvider, PasswordHasher
from common.auth.jwt_auth import JWTTokenService
from common.auth.password_hasher import BcryptPasswordHasher
from common.auth.dependencies import create_auth_dependency

__all__ = [
    "TokenProvider",
    "PasswordHasher",
    "JWTTokenService",
    "BcryptPasswordHasher",
    "create_auth_dependency",
]
