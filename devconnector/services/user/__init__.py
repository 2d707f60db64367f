"""User services."""

from devconnector.services.user.user_service import UserService, serialize_user

__all__ = ["UserService", "serialize_user"]
