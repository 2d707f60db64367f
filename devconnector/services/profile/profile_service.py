"""
Profile service for the developer profile aggregate.

A profile belongs to exactly one user and owns two ordered
sub-collections (experience, education), newest entry first. The owner
is always the user id resolved from the session token; no operation
takes an owner id from the request body.

Concurrency: sub-collection changes read the whole document, modify it
and write it back. Two concurrent changes by the same user can therefore
lose one of the updates (last write wins). The upsert itself is a single
atomic ``find_one_and_update``.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from common.utils.exceptions import NotFoundException, ValidationException
from devconnector.schemas.profile import SOCIAL_PLATFORMS
from devconnector.services.ids import parse_object_id
from devconnector.services.profile.normalization import normalize_skills, normalize_url
from devconnector.services.user.user_service import UserService

logger = logging.getLogger(__name__)

PLAIN_FIELDS = ("company", "location", "bio", "status", "githubusername")

EXPERIENCE = "experience"
EDUCATION = "education"


def _as_datetime(value: Optional[date]) -> Optional[datetime]:
    """BSON has no date type; store dates as UTC midnight."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _serialize_entry(entry: dict) -> dict:
    serialized = dict(entry)
    serialized["_id"] = str(entry["_id"])
    return serialized


def serialize_profile(profile: dict, user: Optional[dict]) -> dict:
    """JSON-ready profile with the owner's name and avatar joined in."""
    owner = None
    if user:
        owner = {
            "_id": str(user["_id"]),
            "name": user.get("name"),
            "avatar": user.get("avatar"),
        }

    return {
        "_id": str(profile["_id"]),
        "user": owner,
        "company": profile.get("company"),
        "website": profile.get("website"),
        "location": profile.get("location"),
        "bio": profile.get("bio"),
        "status": profile.get("status"),
        "githubusername": profile.get("githubusername"),
        "skills": profile.get("skills", []),
        "social": profile.get("social", {}),
        "experience": [_serialize_entry(e) for e in profile.get(EXPERIENCE, [])],
        "education": [_serialize_entry(e) for e in profile.get(EDUCATION, [])],
        "date": profile.get("date"),
    }


class ProfileService:
    """
    Manages profiles and their experience/education entries.
    """

    def __init__(self, db: AsyncIOMotorDatabase, user_service: UserService):
        """
        Initialize ProfileService.

        Args:
            db: MongoDB database connection
            user_service: For joining owner name/avatar onto profiles
        """
        self._db = db
        self._user_service = user_service
        self._profiles_collection = db["profiles"]

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    async def get_own_profile(self, user_id: str) -> dict:
        """
        The authenticated user's profile.

        Raises:
            NotFoundException: User has not created a profile yet
        """
        profile = await self._find_by_owner(user_id)
        if not profile:
            raise NotFoundException(
                message="There is no profile for this user",
                code="PROFILE_NOT_FOUND",
            )
        return await self._populate(profile)

    async def get_profile_by_user(self, user_id: str) -> dict:
        """
        Public lookup by a user id taken from the URL.

        A malformed id and a missing profile produce the same response;
        only the log line tells them apart.
        """
        oid = parse_object_id(user_id)
        if oid is None:
            logger.warning(f"Profile lookup with malformed user id: {user_id!r}")
            raise NotFoundException(message="Profile not found", code="PROFILE_NOT_FOUND")

        profile = await self._profiles_collection.find_one({"user": oid})
        if not profile:
            logger.info(f"No profile for user {user_id}")
            raise NotFoundException(message="Profile not found", code="PROFILE_NOT_FOUND")

        return await self._populate(profile)

    async def list_profiles(self) -> List[dict]:
        """All profiles with owner name/avatar joined."""
        cursor = self._profiles_collection.find({})
        profiles = await cursor.to_list(length=None)

        owners = await self._user_service.get_users_by_ids(
            {p["user"] for p in profiles if p.get("user") is not None}
        )
        return [serialize_profile(p, owners.get(p.get("user"))) for p in profiles]

    # ─────────────────────────────────────────────────────────────
    # Upsert
    # ─────────────────────────────────────────────────────────────

    async def upsert_profile(self, user_id: str, fields: Dict[str, Any]) -> dict:
        """
        Create the user's profile, or merge the supplied fields into it.

        Args:
            user_id: Owner id from the session token
            fields: Only the fields the client sent; others stay untouched

        Returns:
            The resulting profile

        Raises:
            ValidationException: First profile without skills, or an
                unparseable URL
        """
        owner = self._owner_id(user_id)
        set_fields: Dict[str, Any] = {}
        unset_fields: Dict[str, str] = {}

        for field in PLAIN_FIELDS:
            if field in fields:
                set_fields[field] = fields[field]

        if "website" in fields:
            set_fields["website"] = self._normalize_url_field("website", fields["website"])

        if fields.get("skills") is not None:
            set_fields["skills"] = normalize_skills(fields["skills"])

        for platform in SOCIAL_PLATFORMS:
            if platform not in fields:
                continue
            url = self._normalize_url_field(platform, fields[platform])
            if url:
                set_fields[f"social.{platform}"] = url
            else:
                unset_fields[f"social.{platform}"] = ""

        update: Dict[str, Any] = {
            "$set": set_fields,
            "$setOnInsert": {
                EXPERIENCE: [],
                EDUCATION: [],
                "date": datetime.now(timezone.utc),
            },
        }
        if unset_fields:
            update["$unset"] = unset_fields

        # Skills are mandatory for a new profile, so only upsert when present
        profile = await self._profiles_collection.find_one_and_update(
            {"user": owner},
            update,
            upsert="skills" in set_fields,
            return_document=ReturnDocument.AFTER,
        )

        if profile is None:
            raise ValidationException.single("Skills is required", param="skills")

        logger.info(f"Profile upserted for user {user_id}")
        return await self._populate(profile)

    # ─────────────────────────────────────────────────────────────
    # Experience / education
    # ─────────────────────────────────────────────────────────────

    async def add_experience(self, user_id: str, entry: Dict[str, Any]) -> dict:
        """Insert an experience entry at the head of the sequence."""
        return await self._add_entry(user_id, EXPERIENCE, entry)

    async def add_education(self, user_id: str, entry: Dict[str, Any]) -> dict:
        """Insert an education entry at the head of the sequence."""
        return await self._add_entry(user_id, EDUCATION, entry)

    async def remove_experience(self, user_id: str, experience_id: str) -> dict:
        """Remove an experience entry by id; unknown ids are a no-op."""
        return await self._remove_entry(user_id, EXPERIENCE, experience_id)

    async def remove_education(self, user_id: str, education_id: str) -> dict:
        """Remove an education entry by id; unknown ids are a no-op."""
        return await self._remove_entry(user_id, EDUCATION, education_id)

    # ─────────────────────────────────────────────────────────────
    # Delete
    # ─────────────────────────────────────────────────────────────

    async def delete_profile(self, user_id: str) -> bool:
        """
        Remove the user's profile. Deleting a missing profile is a no-op.

        Returns:
            True if a profile was removed
        """
        oid = parse_object_id(user_id)
        if oid is None:
            return False
        result = await self._profiles_collection.delete_one({"user": oid})
        return result.deleted_count > 0

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    def _owner_id(self, user_id: str) -> ObjectId:
        oid = parse_object_id(user_id)
        if oid is None:
            raise NotFoundException(message="User not found", code="USER_NOT_FOUND")
        return oid

    async def _find_by_owner(self, user_id: str) -> Optional[dict]:
        return await self._profiles_collection.find_one({"user": self._owner_id(user_id)})

    async def _require_profile(self, user_id: str) -> dict:
        profile = await self._find_by_owner(user_id)
        if not profile:
            raise NotFoundException(
                message="There is no profile for this user",
                code="PROFILE_NOT_FOUND",
            )
        return profile

    async def _populate(self, profile: dict) -> dict:
        owner = None
        if profile.get("user") is not None:
            owner = await self._user_service.get_user_by_id(str(profile["user"]))
        return serialize_profile(profile, owner)

    async def _save(self, profile: dict) -> None:
        await self._profiles_collection.replace_one({"_id": profile["_id"]}, profile)

    async def _add_entry(self, user_id: str, collection: str, entry: Dict[str, Any]) -> dict:
        profile = await self._require_profile(user_id)

        new_entry = {"_id": ObjectId(), **entry}
        new_entry["from"] = _as_datetime(new_entry.get("from"))
        new_entry["to"] = _as_datetime(new_entry.get("to"))

        profile[collection] = [new_entry] + list(profile.get(collection, []))
        await self._save(profile)

        logger.info(f"Added {collection} entry {new_entry['_id']} for user {user_id}")
        return await self._populate(profile)

    async def _remove_entry(self, user_id: str, collection: str, entry_id: str) -> dict:
        profile = await self._require_profile(user_id)

        entries = list(profile.get(collection, []))
        remaining = [e for e in entries if str(e.get("_id")) != entry_id]

        if len(remaining) != len(entries):
            profile[collection] = remaining
            await self._save(profile)
            logger.info(f"Removed {collection} entry {entry_id} for user {user_id}")
        else:
            logger.info(f"No {collection} entry {entry_id} for user {user_id}; nothing removed")

        return await self._populate(profile)

    def _normalize_url_field(self, field: str, value: Optional[str]) -> str:
        try:
            return normalize_url(value or "")
        except ValueError:
            raise ValidationException.single(f"Please include a valid URL for {field}", param=field)
