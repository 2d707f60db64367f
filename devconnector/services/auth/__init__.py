"""Auth services."""

from devconnector.services.auth.auth_service import AuthService, INVALID_CREDENTIALS

__all__ = ["AuthService", "INVALID_CREDENTIALS"]
