"""SQLAlchemy models for the Middle Ground application."""

from .comment import Comment
from .enums import EntityType, Leaning
from .like import Like
from .post import Post
from .user import User

__all__ = [
    "Comment",
    "EntityType", "Leaning",
    "Like",
    "Post",
    "User",
]
