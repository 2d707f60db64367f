"""Profile services."""

from devconnector.services.profile.profile_service import ProfileService, serialize_profile
from devconnector.services.profile.normalization import normalize_url, normalize_skills

__all__ = ["ProfileService", "serialize_profile", "normalize_url", "normalize_skills"]
