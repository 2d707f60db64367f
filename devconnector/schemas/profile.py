"""
Pydantic models for Profile request validation.

Only fields the client actually sends are written on update, so the
service reads these with ``model_dump(exclude_unset=True)``.
"""

from datetime import date, datetime, time, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def _require_text(value, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _date_to_datetime(value):
    """Plain dates (``"2020-01-01"``) become UTC midnight; timestamps pass through."""
    if isinstance(value, str) and len(value.strip()) == 10:
        value = date.fromisoformat(value.strip())
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


class ProfileRequest(BaseModel):
    """Request body for ``POST /api/profile`` (create or update)."""
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = Field(None, validate_default=True)
    githubusername: Optional[str] = None
    skills: Optional[Union[List[str], str]] = None

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value):
        return _require_text(value, "Status is required")

    @field_validator("skills", mode="before")
    @classmethod
    def check_skills(cls, value):
        # Only runs when skills is supplied; a first-time profile without
        # skills is rejected by the service.
        if isinstance(value, str):
            if not value.replace(",", "").strip():
                raise ValueError("Skills is required")
        elif isinstance(value, list):
            if not any(isinstance(s, str) and s.strip() for s in value):
                raise ValueError("Skills is required")
        else:
            raise ValueError("Skills is required")
        return value


class _TimelineEntry(BaseModel):
    """Fields shared by experience and education entries."""
    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[datetime] = Field(None, alias="from", validate_default=True)
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    @field_validator("from_", mode="before")
    @classmethod
    def check_from(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("From date is required")
        return _date_to_datetime(value)

    @field_validator("to", mode="before")
    @classmethod
    def blank_to(cls, value):
        value = _blank_to_none(value)
        return None if value is None else _date_to_datetime(value)


class ExperienceRequest(_TimelineEntry):
    """Request body for ``PUT /api/profile/experience``."""
    title: Optional[str] = Field(None, validate_default=True)
    company: Optional[str] = Field(None, validate_default=True)
    location: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value):
        return _require_text(value, "Title is required")

    @field_validator("company", mode="before")
    @classmethod
    def check_company(cls, value):
        return _require_text(value, "Company is required")


class EducationRequest(_TimelineEntry):
    """Request body for ``PUT /api/profile/education``."""
    school: Optional[str] = Field(None, validate_default=True)
    degree: Optional[str] = Field(None, validate_default=True)
    fieldofstudy: Optional[str] = None

    @field_validator("school", mode="before")
    @classmethod
    def check_school(cls, value):
        return _require_text(value, "School is required")

    @field_validator("degree", mode="before")
    @classmethod
    def check_degree(cls, value):
        return _require_text(value, "Degree is required")
