"""
DevConnector request schemas.
"""

from devconnector.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from devconnector.schemas.profile import (
    SOCIAL_PLATFORMS,
    ProfileRequest,
    ExperienceRequest,
    EducationRequest,
)

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "SOCIAL_PLATFORMS",
    "ProfileRequest",
    "ExperienceRequest",
    "EducationRequest",
]
