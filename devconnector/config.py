"""
DevConnector application settings.

Extends the base settings with application-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """DevConnector-specific settings."""

    # ==========================================================================
    # Account Deletion
    # ==========================================================================
    # Accounts still marked pendingDeletion after this many minutes are
    # picked up again by jobs.account_deletion
    DELETION_RETRY_AFTER_MINUTES: int = 15

    # ==========================================================================
    # Avatars
    # ==========================================================================
    GRAVATAR_BASE_URL: str = "https://www.gravatar.com/avatar"


# Global settings instance
settings = Settings()
