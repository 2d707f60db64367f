"""
User service for account lifecycle management.

Handles registration, lookup and removal of user records in the
``users`` collection.
"""

import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth.base import PasswordHasher
from common.utils.exceptions import ValidationException
from devconnector.services.ids import parse_object_id

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "active"
STATUS_PENDING_DELETION = "pendingDeletion"


def serialize_user(user: dict) -> dict:
    """Public view of a user document (never includes the password hash)."""
    return {
        "_id": str(user["_id"]),
        "name": user.get("name"),
        "email": user.get("email"),
        "avatar": user.get("avatar"),
        "date": user.get("date"),
    }


class UserService:
    """
    Manages user records.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        password_hasher: PasswordHasher,
        gravatar_base_url: str = "https://www.gravatar.com/avatar",
    ):
        """
        Initialize UserService.

        Args:
            db: MongoDB database connection
            password_hasher: Hashes passwords on registration
            gravatar_base_url: Base URL for generated avatars
        """
        self._db = db
        self._password_hasher = password_hasher
        self._gravatar_base_url = gravatar_base_url.rstrip("/")
        self._users_collection = db["users"]

    def avatar_url(self, email: str) -> str:
        """Gravatar URL for an email (200px, PG rated, mystery-man fallback)."""
        digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
        return f"{self._gravatar_base_url}/{digest}?d=mm&r=pg&s=200"

    async def create_user(self, name: str, email: str, password: str) -> dict:
        """
        Create a new user record.

        Args:
            name: Display name
            email: Email address (stored lowercase)
            password: Plaintext password, hashed before storage

        Returns:
            Created user document

        Raises:
            ValidationException: Email already registered
        """
        email = email.strip().lower()

        existing = await self._users_collection.find_one({"email": email}, {"_id": 1})
        if existing:
            raise ValidationException.single("User already exists")

        now = datetime.now(timezone.utc)
        user_doc = {
            "name": name,
            "email": email,
            "avatar": self.avatar_url(email),
            "password": self._password_hasher.hash(password),
            "status": STATUS_ACTIVE,
            "date": now,
        }

        result = await self._users_collection.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id

        logger.info(f"User created: {result.inserted_id}")
        return user_doc

    async def get_user_by_id(self, user_id: str) -> Optional[dict]:
        """
        Load user by id, without the password hash.

        Returns:
            User document or None if not found or the id is malformed
        """
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        return await self._users_collection.find_one({"_id": oid}, {"password": 0})

    async def get_user_by_email(self, email: str) -> Optional[dict]:
        """
        Load user by email address, including the password hash.

        Only the login flow should call this.
        """
        return await self._users_collection.find_one({"email": email.strip().lower()})

    async def get_users_by_ids(self, user_ids: List) -> dict:
        """Map of user id -> {name, avatar} for joining onto profiles."""
        if not user_ids:
            return {}
        cursor = self._users_collection.find(
            {"_id": {"$in": list(user_ids)}},
            {"name": 1, "avatar": 1},
        )
        users = await cursor.to_list(length=None)
        return {user["_id"]: user for user in users}

    async def mark_deletion_pending(self, user_id: str) -> bool:
        """
        Flag an account whose deletion cascade is in progress.

        Returns:
            True if a user record was flagged
        """
        oid = parse_object_id(user_id)
        if oid is None:
            return False

        result = await self._users_collection.update_one(
            {"_id": oid},
            {
                "$set": {
                    "status": STATUS_PENDING_DELETION,
                    "deletion": {"requestedAt": datetime.now(timezone.utc)},
                }
            },
        )
        return result.matched_count > 0

    async def find_pending_deletions(self, requested_before: datetime) -> List[dict]:
        """Users still flagged for deletion since before ``requested_before``."""
        cursor = self._users_collection.find(
            {
                "status": STATUS_PENDING_DELETION,
                "deletion.requestedAt": {"$lt": requested_before},
            },
            {"_id": 1, "deletion": 1},
        )
        return await cursor.to_list(length=None)

    async def delete_user(self, user_id: str) -> bool:
        """
        Remove the user record. Deleting a missing user is a no-op.

        Returns:
            True if a record was removed
        """
        oid = parse_object_id(user_id)
        if oid is None:
            return False

        result = await self._users_collection.delete_one({"_id": oid})
        return result.deleted_count > 0
