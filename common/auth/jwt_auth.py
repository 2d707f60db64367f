"""
JWT session token service.

Tokens carry ``{"user": {"id": <user id>}}`` plus ``iat``/``exp`` claims and
are signed with HS256 by default, which keeps them interchangeable with
tokens issued by the previous Node service (jsonwebtoken defaults).

Example:
    tokens = JWTTokenService(secret="your-secret-key")

    token = tokens.issue(user_id)
    assert tokens.verify(token) == user_id
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from common.auth.base import TokenProvider

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN_SECONDS = 360000  # 100 hours


class JWTTokenService(TokenProvider):
    """
    Stateless JWT issuer/verifier.

    The signing secret is fixed at construction; nothing here reads
    process-wide state.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in_seconds: int = DEFAULT_EXPIRES_IN_SECONDS,
    ):
        """
        Initialize the token service.

        Args:
            secret: Secret key for JWT signing (keep this secure!)
            algorithm: JWT algorithm (default: HS256)
            expires_in_seconds: Token lifetime counted from issuance
        """
        if not secret:
            raise ValueError("A signing secret is required")

        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = timedelta(seconds=expires_in_seconds)

    def issue(self, user_id: str, issued_at: Optional[datetime] = None) -> str:
        """Create a signed JWT for the user."""
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[str]:
        """Decode a JWT and return its user id, or None if it is not valid."""
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None

        if not user_id or not isinstance(user_id, str):
            logger.debug("Token rejected: missing user id claim")
            return None

        return user_id
