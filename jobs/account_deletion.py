"""
Account deletion retry job.

Finishes account deletions that were interrupted part-way (for example a
crash after the posts were removed but before the user record was). Such
accounts are still flagged ``pendingDeletion``; re-running the cascade is
safe because every step is idempotent.

Usage:
    Run via CRON:
        */15 * * * * cd /path/to/project && python -m jobs.account_deletion

    Or run directly:
        python -m jobs.account_deletion
"""

import asyncio
import logging
import sys
from datetime import datetime, timezone, timedelta
from typing import Dict, Any

from devconnector.services.account.account_deletion import AccountDeletionService
from devconnector.services.user.user_service import UserService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class AccountDeletionJob:
    """
    Re-runs the deletion cascade for accounts stuck in ``pendingDeletion``.

    Only accounts flagged longer than ``retry_after`` ago are picked up, so a
    deletion that is still running in a request is left alone.
    """

    def __init__(
        self,
        user_service: UserService,
        account_deletion: AccountDeletionService,
        retry_after: timedelta = timedelta(minutes=15),
    ):
        """
        Initialize the job.

        Args:
            user_service: For finding flagged accounts
            account_deletion: The cascade to re-run
            retry_after: Minimum age of the pendingDeletion flag
        """
        self._user_service = user_service
        self._account_deletion = account_deletion
        self._retry_after = retry_after

    async def run(self) -> Dict[str, Any]:
        """
        Execute the job.

        Returns:
            Dict with job results including counts and any errors
        """
        logger.info("Starting account deletion retry job")
        start_time = datetime.now(timezone.utc)

        results = {
            "startTime": start_time.isoformat(),
            "usersProcessed": 0,
            "totalPostsDeleted": 0,
            "totalProfilesDeleted": 0,
            "errors": [],
        }

        cutoff = start_time - self._retry_after
        pending = await self._user_service.find_pending_deletions(requested_before=cutoff)
        logger.info(f"Found {len(pending)} interrupted account deletions")

        for user in pending:
            user_id = str(user["_id"])
            try:
                summary = await self._account_deletion.delete_account(user_id)
                results["usersProcessed"] += 1
                results["totalPostsDeleted"] += summary["postsDeleted"]
                results["totalProfilesDeleted"] += int(summary["profileDeleted"])
            except Exception as e:
                error_msg = f"Failed to delete user {user_id}: {e}"
                logger.error(error_msg)
                results["errors"].append(error_msg)

        results["endTime"] = datetime.now(timezone.utc).isoformat()
        results["durationSeconds"] = (
            datetime.now(timezone.utc) - start_time
        ).total_seconds()

        logger.info(
            f"Account deletion retry job completed. "
            f"Processed: {results['usersProcessed']} users, "
            f"Errors: {len(results['errors'])}"
        )

        return results


async def main():
    """Main entry point for the account deletion retry job."""
    from common.database import MongoDB
    from devconnector.config import settings
    from devconnector.dependencies import (
        init_all_services,
        get_account_deletion_service,
        get_user_service,
    )

    settings.validate_required()

    db = MongoDB()
    await db.connect(uri=settings.MONGODB_URI, database_name=settings.MONGODB_DATABASE)
    init_all_services(db=db.db, settings=settings)

    job = AccountDeletionJob(
        user_service=get_user_service(),
        account_deletion=get_account_deletion_service(),
        retry_after=timedelta(minutes=settings.DELETION_RETRY_AFTER_MINUTES),
    )

    try:
        results = await job.run()

        print("\n=== Account Deletion Retry Job Results ===")
        print(f"Start Time: {results['startTime']}")
        print(f"End Time: {results['endTime']}")
        print(f"Duration: {results['durationSeconds']:.2f} seconds")
        print(f"Users Processed: {results['usersProcessed']}")
        print(f"Posts Deleted: {results['totalPostsDeleted']}")
        print(f"Profiles Deleted: {results['totalProfilesDeleted']}")

        if results["errors"]:
            print(f"\nErrors ({len(results['errors'])}):")
            for error in results["errors"]:
                print(f"  - {error}")

        sys.exit(1 if results["errors"] else 0)
    finally:
        await db.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
