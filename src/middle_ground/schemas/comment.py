"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from middle_ground.models.comment import Comment
from middle_ground.schemas.like import LikeMetrics
from middle_ground.schemas.user import AuthorOut
from middle_ground.services.aggregator import LikeDistribution
from middle_ground.services.comment_thread import CommentPage, ThreadedComment


class CommentCreate(BaseModel):
    """Schema for creating a comment.

    Exactly one of ``post_id`` (top-level comment) or ``parent_comment_id``
    (reply) must be given.
    """

    body: str | None = Field(None, description="Comment body")
    post_id: int | None = Field(None, description="Post for a top-level comment")
    parent_comment_id: int | None = Field(None, description="Comment being replied to")


class CommentCreated(BaseModel):
    success: bool = True
    message: str = "Comment added successfully"
    comment_id: int
    post_id: int
    parent_comment_id: int | None


class CommentOut(LikeMetrics):
    """A comment with its author and like metrics."""

    comment_id: int
    post_id: int
    parent_comment_id: int | None
    body: str
    date_posted: datetime
    author: AuthorOut

    @classmethod
    def from_comment(cls, comment: Comment, likes: LikeDistribution) -> CommentOut:
        return cls(
            comment_id=comment.comment_id,
            post_id=comment.post_id,
            parent_comment_id=comment.parent_comment_id,
            body=comment.body,
            date_posted=comment.date_posted,
            author=AuthorOut.model_validate(comment.author),
            **LikeMetrics.fields_from(likes),
        )


class ThreadCommentOut(CommentOut):
    reply_count: int

    @classmethod
    def from_threaded(cls, item: ThreadedComment) -> ThreadCommentOut:
        base = CommentOut.from_comment(item.comment, item.likes)
        return cls(reply_count=item.reply_count, **base.model_dump())


class CommentListResponse(BaseModel):
    """Schema for one page of a comment thread."""

    success: bool = True
    current_page: int
    total_pages: int
    total_comments: int
    comments_per_page: int
    sort_by: str
    parent_comment_id: int | None
    comments: list[ThreadCommentOut]

    @classmethod
    def from_page(cls, page: CommentPage) -> CommentListResponse:
        return cls(
            current_page=page.ranked.request.page,
            total_pages=page.total_pages,
            total_comments=page.total,
            comments_per_page=page.ranked.request.limit,
            sort_by=page.sort.value,
            parent_comment_id=page.scope.parent_comment_id,
            comments=[ThreadCommentOut.from_threaded(item) for item in page.items],
        )
