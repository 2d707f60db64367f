"""
Account deletion orchestrator.

Removes a user's posts, then their profile, then the user record. The
store has no cross-collection transactions, so the cascade is not atomic:
a failure part-way leaves the earlier steps applied. Every step is
idempotent, and the user is flagged ``pendingDeletion`` before the first
delete so ``jobs.account_deletion`` can finish interrupted runs.

The user record is always removed last; removing it first would leave
posts and a profile pointing at an owner that no longer exists.
"""

import logging
from typing import Any, Dict

from devconnector.services.posts.post_service import PostService
from devconnector.services.profile.profile_service import ProfileService
from devconnector.services.user.user_service import UserService

logger = logging.getLogger(__name__)


class AccountDeletionService:
    """
    Runs the posts -> profile -> user cascade.
    """

    def __init__(
        self,
        user_service: UserService,
        profile_service: ProfileService,
        post_service: PostService,
    ):
        self._user_service = user_service
        self._profile_service = profile_service
        self._post_service = post_service

    async def delete_account(self, user_id: str) -> Dict[str, Any]:
        """
        Delete everything owned by ``user_id``.

        Safe to call again after a partial failure.

        Returns:
            Summary of what each step removed

        Raises:
            Exception: Whatever the store raised; earlier steps stay applied
        """
        step = "mark"
        try:
            await self._user_service.mark_deletion_pending(user_id)

            step = "posts"
            posts_deleted = await self._post_service.delete_posts_by_user(user_id)

            step = "profile"
            profile_deleted = await self._profile_service.delete_profile(user_id)

            step = "user"
            user_deleted = await self._user_service.delete_user(user_id)
        except Exception as e:
            logger.error(
                f"Account deletion for user {user_id} stopped at step '{step}': {e}"
            )
            raise

        logger.info(
            f"Account deleted for user {user_id}: "
            f"{posts_deleted} posts, profile={profile_deleted}, user={user_deleted}"
        )

        return {
            "postsDeleted": posts_deleted,
            "profileDeleted": profile_deleted,
            "userDeleted": user_deleted,
        }
