"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentCreated, CommentListResponse, CommentOut
from .like import LikeCounts, LikeRequest, LikeResponse
from .post import PostCreate, PostCreated, PostDetailResponse, PostListResponse, PostSummary
from .user import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest, UserOut

__all__ = [
    "AuthResponse", "LoginRequest", "ProfileResponse", "RegisterRequest", "UserOut",
    "CommentCreate", "CommentCreated", "CommentListResponse", "CommentOut",
    "LikeCounts", "LikeRequest", "LikeResponse",
    "PostCreate", "PostCreated", "PostDetailResponse", "PostListResponse", "PostSummary",
]
