"""
FastAPI router for Profile endpoints.

Every mutating endpoint acts on the profile of the user resolved from the
session token; none accepts an owner id from the client.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from devconnector.dependencies import (
    CurrentUserId,
    get_account_deletion_service,
    get_profile_service,
)
from devconnector.schemas.profile import EducationRequest, ExperienceRequest, ProfileRequest
from devconnector.services.account.account_deletion import AccountDeletionService
from devconnector.services.profile.profile_service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])

Profiles = Annotated[ProfileService, Depends(get_profile_service)]


@router.get("/me")
async def get_my_profile(user_id: CurrentUserId, profile_service: Profiles):
    """Get the current user's profile."""
    return await profile_service.get_own_profile(user_id)


@router.post("")
async def upsert_profile(body: ProfileRequest, user_id: CurrentUserId, profile_service: Profiles):
    """
    Create or update the current user's profile.

    Only provided fields will be updated.
    """
    return await profile_service.upsert_profile(user_id, body.model_dump(exclude_unset=True))


@router.get("")
async def list_profiles(profile_service: Profiles):
    """Get all profiles."""
    return await profile_service.list_profiles()


@router.get("/user/{user_id}")
async def get_profile_by_user(user_id: str, profile_service: Profiles):
    """Get a profile by its owner's user id."""
    return await profile_service.get_profile_by_user(user_id)


@router.delete("")
async def delete_account(
    user_id: CurrentUserId,
    account_deletion: Annotated[AccountDeletionService, Depends(get_account_deletion_service)],
):
    """
    Delete the current user's posts, profile and account.
    """
    await account_deletion.delete_account(user_id)
    return {"msg": "User deleted"}


@router.put("/experience")
async def add_experience(body: ExperienceRequest, user_id: CurrentUserId, profile_service: Profiles):
    """Add an experience entry (placed first)."""
    return await profile_service.add_experience(user_id, body.model_dump(by_alias=True))


@router.put("/education")
async def add_education(body: EducationRequest, user_id: CurrentUserId, profile_service: Profiles):
    """Add an education entry (placed first)."""
    return await profile_service.add_education(user_id, body.model_dump(by_alias=True))


@router.delete("/experience/{exp_id}")
async def remove_experience(exp_id: str, user_id: CurrentUserId, profile_service: Profiles):
    """Remove an experience entry; unknown ids leave the profile unchanged."""
    return await profile_service.remove_experience(user_id, exp_id)


@router.delete("/education/{edu_id}")
async def remove_education(edu_id: str, user_id: CurrentUserId, profile_service: Profiles):
    """Remove an education entry; unknown ids leave the profile unchanged."""
    return await profile_service.remove_education(user_id, edu_id)
