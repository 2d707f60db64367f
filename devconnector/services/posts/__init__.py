"""Post services."""

from devconnector.services.posts.post_service import PostService

__all__ = ["PostService"]
