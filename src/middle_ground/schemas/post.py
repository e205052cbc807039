"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from middle_ground.schemas.comment import CommentOut
from middle_ground.schemas.like import LikeMetrics
from middle_ground.schemas.user import AuthorOut
from middle_ground.services.feed_service import PostDetail, PostPage, RankedPost


class PostCreate(BaseModel):
    """Schema for creating a new post.

    ``title`` and ``body`` are optional here; empty values are rejected by the
    feed service with a single validation error.
    """

    title: str | None = Field(None, max_length=255)
    body: str | None = Field(None, description="Post body")
    sources: str | None = Field(None, description="Free-form source citations")


class PostCreated(BaseModel):
    success: bool = True
    message: str = "Post created successfully"
    post_id: int


class PostSummary(LikeMetrics):
    """A post with its author, comment count and like metrics."""

    post_id: int
    title: str
    body: str
    sources: str | None
    date_posted: datetime
    author: AuthorOut
    comment_count: int

    @classmethod
    def from_ranked(cls, item: RankedPost) -> PostSummary:
        post = item.post
        return cls(
            post_id=post.post_id,
            title=post.title,
            body=post.body,
            sources=post.sources,
            date_posted=post.date_posted,
            author=AuthorOut.model_validate(post.author),
            comment_count=item.comment_count,
            **LikeMetrics.fields_from(item.likes),
        )


class PostListResponse(BaseModel):
    """Schema for one page of the ranked feed."""

    success: bool = True
    current_page: int
    total_pages: int
    total_posts: int
    posts_per_page: int
    sort_by: str
    posts: list[PostSummary]

    @classmethod
    def from_page(cls, page: PostPage) -> PostListResponse:
        return cls(
            current_page=page.ranked.request.page,
            total_pages=page.total_pages,
            total_posts=page.total,
            posts_per_page=page.ranked.request.limit,
            sort_by=page.sort.value,
            posts=[PostSummary.from_ranked(item) for item in page.items],
        )


class PostDetailOut(LikeMetrics):
    post_id: int
    title: str
    body: str
    sources: str | None
    date_posted: datetime
    author: AuthorOut
    comments: list[CommentOut]


class PostDetailResponse(BaseModel):
    """Schema for a single post with its whole comment thread."""

    success: bool = True
    post: PostDetailOut

    @classmethod
    def from_detail(cls, detail: PostDetail) -> PostDetailResponse:
        post = detail.post
        return cls(
            post=PostDetailOut(
                post_id=post.post_id,
                title=post.title,
                body=post.body,
                sources=post.sources,
                date_posted=post.date_posted,
                author=AuthorOut.model_validate(post.author),
                comments=[
                    CommentOut.from_comment(comment, likes)
                    for comment, likes in detail.comments
                ],
                **LikeMetrics.fields_from(detail.likes),
            )
        )
