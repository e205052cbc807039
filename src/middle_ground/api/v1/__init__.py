"""Version 1 API endpoints."""

from .endpoints import auth_router, comments_router, likes_router, posts_router

__all__ = [
    "auth_router",
    "posts_router",
    "comments_router",
    "likes_router",
]
