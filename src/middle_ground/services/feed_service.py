"""Service-level helpers for creating and reading feed content."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from middle_ground.models.comment import Comment
from middle_ground.models.enums import EntityType
from middle_ground.models.post import Post
from middle_ground.repositories.comment_repo import CommentRepository
from middle_ground.repositories.post_repo import PostRepository
from middle_ground.repositories.user_repo import UserRepository
from middle_ground.services.aggregator import LikeDistribution, aggregate, aggregate_many
from middle_ground.services.entities import EntityRef, ParentRef
from middle_ground.services.errors import MissingFields, PostNotFound, UserNotFound
from middle_ground.services.ranking import PageRequest, PostSort, RankedPage, rank_posts

logger = logging.getLogger(__name__)

__all__ = [
    "PostDetail",
    "PostPage",
    "RankedPost",
    "add_comment",
    "create_post",
    "get_post",
    "list_posts",
]


@dataclass(frozen=True)
class RankedPost:
    post: Post
    likes: LikeDistribution
    comment_count: int


@dataclass(frozen=True)
class PostPage:
    items: list[RankedPost]
    ranked: RankedPage
    sort: PostSort

    @property
    def total(self) -> int:
        return self.ranked.total

    @property
    def total_pages(self) -> int:
        return self.ranked.total_pages


@dataclass(frozen=True)
class PostDetail:
    post: Post
    likes: LikeDistribution
    comments: list[tuple[Comment, LikeDistribution]]


def create_post(
    db: Session,
    username: str,
    title: str | None,
    body: str | None,
    sources: str | None = None,
) -> Post:
    """Create a post authored by ``username``.

    Raises:
        MissingFields: If the title or body is empty.
        UserNotFound: If ``username`` is not registered.
    """
    if not title or not title.strip() or not body or not body.strip():
        raise MissingFields("Title and body are required")
    if UserRepository(db).get_by_username(username) is None:
        raise UserNotFound()

    try:
        post = PostRepository(db).create(
            username=username,
            title=title,
            body=body,
            sources=sources or None,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(post)
    logger.info("Post %d created by %s", post.post_id, username)
    return post


def list_posts(db: Session, page: PageRequest, sort: PostSort | str | None = None) -> PostPage:
    """Return one ranked page of posts with their distributions and comment counts."""
    policy = sort if isinstance(sort, PostSort) else PostSort.parse(sort)
    ranked = rank_posts(db, policy, page)
    posts = PostRepository(db).get_many(ranked.ids)
    likes = aggregate_many(db, EntityType.POST, ranked.ids)
    comment_counts = CommentRepository(db).count_for_posts(ranked.ids)
    items = [
        RankedPost(
            post=post,
            likes=likes[post.post_id],
            comment_count=comment_counts.get(post.post_id, 0),
        )
        for post in posts
    ]
    return PostPage(items=items, ranked=ranked, sort=policy)


def get_post(db: Session, post_id: int) -> PostDetail:
    """Return a post with its distribution and its whole thread, oldest first.

    Raises:
        PostNotFound: If ``post_id`` does not exist.
    """
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise PostNotFound()
    comments = CommentRepository(db).list_for_post(post_id)
    comment_likes = aggregate_many(db, EntityType.COMMENT, [c.comment_id for c in comments])
    return PostDetail(
        post=post,
        likes=aggregate(db, EntityRef.post(post_id)),
        comments=[(comment, comment_likes[comment.comment_id]) for comment in comments],
    )


def add_comment(db: Session, username: str, body: str | None, parent: ParentRef) -> Comment:
    """Create a comment under ``parent`` and return it.

    Raises:
        MissingFields: If the body is empty.
        UserNotFound: If ``username`` is not registered.
        InvalidParent: If the parent post or comment does not exist.
    """
    if not body or not body.strip():
        raise MissingFields("Comment body is required")
    if UserRepository(db).get_by_username(username) is None:
        raise UserNotFound()

    try:
        comment = CommentRepository(db).create(username=username, body=body, parent=parent)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(comment)
    logger.info(
        "Comment %d created by %s on post %d",
        comment.comment_id,
        username,
        comment.post_id,
    )
    return comment
