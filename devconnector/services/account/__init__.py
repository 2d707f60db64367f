"""Account services."""

from devconnector.services.account.account_deletion import AccountDeletionService

__all__ = ["AccountDeletionService"]
