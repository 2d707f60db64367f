"""Tests for the interrupted account deletion retry job."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from devconnector.services.account.account_deletion import AccountDeletionService
from devconnector.services.posts.post_service import PostService
from devconnector.services.profile.profile_service import ProfileService
from devconnector.services.user.user_service import (
    STATUS_ACTIVE,
    STATUS_PENDING_DELETION,
    UserService,
)
from jobs.account_deletion import AccountDeletionJob


def flagged_user(minutes_ago):
    return {
        "_id": ObjectId(),
        "name": "Flagged",
        "email": f"{ObjectId()}@x.com",
        "status": STATUS_PENDING_DELETION,
        "deletion": {"requestedAt": datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)},
    }


@pytest.fixture
def job_parts(fake_db, password_hasher):
    user_service = UserService(db=fake_db, password_hasher=password_hasher)
    deletion = AccountDeletionService(
        user_service=user_service,
        profile_service=ProfileService(db=fake_db, user_service=user_service),
        post_service=PostService(db=fake_db),
    )
    return user_service, deletion


class TestAccountDeletionJob:
    @pytest.mark.asyncio
    async def test_finishes_stale_deletions(self, job_parts, fake_db):
        user_service, deletion = job_parts
        stale = flagged_user(minutes_ago=60)
        await fake_db["users"].insert_one(stale)
        await fake_db["posts"].insert_one({"user": stale["_id"], "text": "left over"})
        await fake_db["profiles"].insert_one({"user": stale["_id"], "status": "Developer"})

        job = AccountDeletionJob(user_service=user_service, account_deletion=deletion)
        results = await job.run()

        assert results["usersProcessed"] == 1
        assert results["totalPostsDeleted"] == 1
        assert results["totalProfilesDeleted"] == 1
        assert results["errors"] == []
        assert fake_db["users"].docs == []
        assert fake_db["posts"].docs == []
        assert fake_db["profiles"].docs == []

    @pytest.mark.asyncio
    async def test_leaves_recent_and_active_users_alone(self, job_parts, fake_db):
        user_service, deletion = job_parts
        await fake_db["users"].insert_one(flagged_user(minutes_ago=1))
        await fake_db["users"].insert_one(
            {"_id": ObjectId(), "name": "Active", "email": "a@x.com", "status": STATUS_ACTIVE}
        )

        job = AccountDeletionJob(
            user_service=user_service,
            account_deletion=deletion,
            retry_after=timedelta(minutes=15),
        )
        results = await job.run()

        assert results["usersProcessed"] == 0
        assert len(fake_db["users"].docs) == 2

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_run(self, sample_user_id):
        other_id = ObjectId()
        user_service = MagicMock()
        user_service.find_pending_deletions = AsyncMock(
            return_value=[{"_id": ObjectId(sample_user_id)}, {"_id": other_id}]
        )
        deletion = MagicMock()
        deletion.delete_account = AsyncMock(
            side_effect=[
                RuntimeError("store unavailable"),
                {"postsDeleted": 2, "profileDeleted": True, "userDeleted": True},
            ]
        )

        job = AccountDeletionJob(user_service=user_service, account_deletion=deletion)
        results = await job.run()

        assert results["usersProcessed"] == 1
        assert results["totalPostsDeleted"] == 2
        assert len(results["errors"]) == 1
        assert sample_user_id in results["errors"][0]
        assert deletion.delete_account.await_count == 2
        assert "durationSeconds" in results
