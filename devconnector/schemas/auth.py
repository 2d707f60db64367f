"""
Pydantic models for Auth request validation.

Validators raise ``ValueError`` with the exact message shown to the client;
the app-level handler turns them into ``{"errors": [{"msg", "param"}]}``.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

MIN_PASSWORD_LENGTH = 6


def _normalize_email(value: Optional[str]) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Please include a valid email")
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please include a valid email")
    return value.strip().lower()


class LoginRequest(BaseModel):
    """Request body for ``POST /api/auth``."""
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value):
        return _normalize_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, value):
        if value is None:
            raise ValueError("Password is required")
        return value


class RegisterRequest(BaseModel):
    """Request body for ``POST /api/users``."""
    name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required")
        return value.strip()

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value):
        return _normalize_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def check_password(cls, value):
        if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
            )
        return value


class TokenResponse(BaseModel):
    """Response for login and registration."""
    token: str
