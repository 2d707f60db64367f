"""
FastAPI dependencies for the DevConnector application.

Services are created once at startup by ``init_all_services`` and handed
to route handlers through the getters below.
"""

from typing import Annotated, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import BcryptPasswordHasher, JWTTokenService, create_auth_dependency
from common.config import BaseAppSettings
from devconnector.config import settings as app_settings
from devconnector.services.account.account_deletion import AccountDeletionService
from devconnector.services.auth.auth_service import AuthService
from devconnector.services.posts.post_service import PostService
from devconnector.services.profile.profile_service import ProfileService
from devconnector.services.user.user_service import UserService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_token_service: Optional[JWTTokenService] = None
_password_hasher: Optional[BcryptPasswordHasher] = None
_auth_service: Optional[AuthService] = None

# Users / profiles
_user_service: Optional[UserService] = None
_profile_service: Optional[ProfileService] = None
_account_deletion_service: Optional[AccountDeletionService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization functions
# ─────────────────────────────────────────────────────────────────

def init_auth_services(settings: BaseAppSettings) -> None:
    """Initialize token and password services from settings."""
    global _token_service, _password_hasher

    _token_service = JWTTokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_in_seconds=settings.JWT_EXPIRES_IN_SECONDS,
    )
    _password_hasher = BcryptPasswordHasher()


def init_user_services(db: AsyncIOMotorDatabase, gravatar_base_url: Optional[str] = None) -> None:
    """Initialize user, profile, post and account services."""
    global _auth_service, _user_service, _profile_service
    global _account_deletion_service

    user_kwargs = {"gravatar_base_url": gravatar_base_url} if gravatar_base_url else {}
    _user_service = UserService(db=db, password_hasher=_password_hasher, **user_kwargs)
    _profile_service = ProfileService(db=db, user_service=_user_service)
    post_service = PostService(db=db)
    _account_deletion_service = AccountDeletionService(
        user_service=_user_service,
        profile_service=_profile_service,
        post_service=post_service,
    )
    _auth_service = AuthService(
        user_service=_user_service,
        password_hasher=_password_hasher,
        token_provider=_token_service,
    )


def init_all_services(db: AsyncIOMotorDatabase, settings: BaseAppSettings) -> None:
    """Initialize every service. Called once from the application lifespan."""
    init_auth_services(settings)
    init_user_services(db, gravatar_base_url=getattr(settings, "GRAVATAR_BASE_URL", None))


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def _require(service, name: str):
    if service is None:
        raise RuntimeError(f"{name} not initialized. Call init_all_services() first.")
    return service


def get_token_service() -> JWTTokenService:
    return _require(_token_service, "JWTTokenService")


def get_auth_service() -> AuthService:
    return _require(_auth_service, "AuthService")


def get_user_service() -> UserService:
    return _require(_user_service, "UserService")


def get_profile_service() -> ProfileService:
    return _require(_profile_service, "ProfileService")


def get_account_deletion_service() -> AccountDeletionService:
    return _require(_account_deletion_service, "AccountDeletionService")


# ─────────────────────────────────────────────────────────────────
# Auth guard
# ─────────────────────────────────────────────────────────────────

# Resolves the caller's user id from the x-auth-token header
require_auth = create_auth_dependency(
    get_token_service,
    header_name=app_settings.AUTH_HEADER_NAME,
)

CurrentUserId = Annotated[str, Depends(require_auth)]
