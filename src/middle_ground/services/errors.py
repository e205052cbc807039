"""Domain exceptions raised by the feed services.

Services raise these instead of HTTP errors; the API layer maps each
family to a status code in :mod:`middle_ground.api.errors`.
"""

from __future__ import annotations


class FeedError(RuntimeError):
    """Base exception for every domain failure."""

    default_message = "Feed operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(FeedError):
    """Missing or malformed input detected before touching storage."""

    default_message = "Invalid request"


class MissingFields(ValidationError):
    default_message = "Missing required fields"


class InvalidEntityType(ValidationError):
    default_message = "Entity type must be either POST or COMMENT"


class InvalidLeaning(ValidationError):
    default_message = "Invalid political leaning. Must be one of: FL, L, SL, M, SR, R, FR"


class AmbiguousParent(ValidationError):
    default_message = "Provide either post_id or parent_comment_id, not both"


class NotFoundError(FeedError):
    """Referenced post, comment, user or like does not exist."""

    default_message = "Not found"


class EntityNotFound(NotFoundError):
    default_message = "Entity not found"


class PostNotFound(EntityNotFound):
    default_message = "Post not found"


class CommentNotFound(EntityNotFound):
    default_message = "Comment not found"


class UserNotFound(NotFoundError):
    default_message = "User not found"


class LikeNotFound(NotFoundError):
    default_message = "Like not found"


class InvalidParent(NotFoundError):
    default_message = "Parent post or comment does not exist"


class ConflictError(FeedError):
    """A uniqueness constraint rejected the write."""

    default_message = "Conflict"


class AlreadyLiked(ConflictError):
    default_message = "You have already liked this item"


class UsernameInUse(ConflictError):
    default_message = "Username already in use"


class EmailInUse(ConflictError):
    default_message = "Email already in use"


class AuthenticationError(FeedError):
    """Credentials or bearer token could not be validated."""

    default_message = "Invalid credentials"


class DeadlineExceeded(FeedError):
    """The request ran past its deadline before storage work finished."""

    default_message = "Request deadline exceeded"
