"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .likes import router as likes_router
from .posts import router as posts_router

__all__ = [
    "auth_router",
    "posts_router",
    "comments_router",
    "likes_router",
]
