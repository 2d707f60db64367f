"""
Abstract token provider and password hasher interfaces.

Defines the contracts the auth guard and the login flow depend on,
so the signing scheme or hash function can be swapped without
changing application code.

Example:
    from common.auth import TokenProvider, JWTTokenService

    def get_token_provider(settings) -> TokenProvider:
        return JWTTokenService(secret=settings.JWT_SECRET)
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class TokenProvider(ABC):
    """
    Issues and verifies stateless session tokens.

    Tokens are self-contained: there is no server-side session or
    revocation list, so logging out means the client discards its token.
    """

    @abstractmethod
    def issue(self, user_id: str, issued_at: Optional[datetime] = None) -> str:
        """
        Create a signed session token for a user.

        Args:
            user_id: The user's ID
            issued_at: Issuance instant (defaults to now)

        Returns:
            The encoded token string
        """
        pass

    @abstractmethod
    def verify(self, token: str) -> Optional[str]:
        """
        Verify a session token.

        Args:
            token: The token to verify

        Returns:
            The user ID carried by the token, or None if the token is
            malformed, wrongly signed or expired
        """
        pass


class PasswordHasher(ABC):
    """One-way salted password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        pass

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns False on mismatch or on a malformed hash; never raises
        for bad credentials.
        """
        pass
