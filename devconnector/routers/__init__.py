"""
DevConnector API Routers.

All routers are imported here for easy access.
"""

from devconnector.routers.auth import router as auth_router
from devconnector.routers.users import router as users_router
from devconnector.routers.profile import router as profile_router

__all__ = [
    "auth_router",
    "users_router",
    "profile_router",
]
