"""
Posts collaborator.

Posts are owned by another part of the product; account deletion only
needs to remove everything a user has written.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from devconnector.services.ids import parse_object_id

logger = logging.getLogger(__name__)


class PostService:
    """Access to the ``posts`` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self._db = db
        self._posts_collection = db["posts"]

    async def delete_posts_by_user(self, user_id: str) -> int:
        """
        Delete every post owned by the user.

        Returns:
            Number of posts removed (0 when there were none)
        """
        oid = parse_object_id(user_id)
        if oid is None:
            return 0

        result = await self._posts_collection.delete_many({"user": oid})
        logger.debug(f"Deleted {result.deleted_count} posts for user {user_id}")
        return result.deleted_count
