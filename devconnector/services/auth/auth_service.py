"""
Authentication service.

Login, registration and "who am I" lookups. Login failures share one
generic message so callers cannot tell a wrong email from a wrong password.
"""

import logging

from common.auth.base import PasswordHasher, TokenProvider
from common.utils.exceptions import NotFoundException, ValidationException
from devconnector.services.user.user_service import UserService, serialize_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid user"


class AuthService:
    """
    Verifies credentials and issues session tokens.
    """

    def __init__(
        self,
        user_service: UserService,
        password_hasher: PasswordHasher,
        token_provider: TokenProvider,
    ):
        self._user_service = user_service
        self._password_hasher = password_hasher
        self._token_provider = token_provider

    async def login(self, email: str, password: str) -> str:
        """
        Authenticate a user and return a fresh token.

        Raises:
            ValidationException: Unknown email or wrong password (same message)
        """
        user = await self._user_service.get_user_by_email(email)
        if not user:
            logger.warning("Login failed: unknown email")
            raise ValidationException.single(INVALID_CREDENTIALS)

        if not self._password_hasher.verify(password, user.get("password", "")):
            logger.warning(f"Login failed: wrong password for user {user['_id']}")
            raise ValidationException.single(INVALID_CREDENTIALS)

        logger.info(f"User {user['_id']} logged in")
        return self._token_provider.issue(str(user["_id"]))

    async def register(self, name: str, email: str, password: str) -> str:
        """Create an account and return its first token."""
        user = await self._user_service.create_user(name=name, email=email, password=password)
        return self._token_provider.issue(str(user["_id"]))

    async def get_current_user(self, user_id: str) -> dict:
        """
        The authenticated user's record, without the password hash.

        Raises:
            NotFoundException: The account was deleted after the token was issued
        """
        user = await self._user_service.get_user_by_id(user_id)
        if not user:
            raise NotFoundException(message="User not found", code="USER_NOT_FOUND")
        return serialize_user(user)
