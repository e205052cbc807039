"""Ranking engine for posts and comments.

Each sort policy maps to a list of ORDER BY expressions over the entity's
``date_posted`` and a grouped like-count subquery, so ordering and the
offset window are evaluated by the database in one statement.

Ties on the policy key fall back to ``date_posted`` descending. Date-based
policies, and rows with identical timestamps, finally fall back to the
surrogate id in the same direction so repeated calls return the same order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import ColumnElement, Subquery, func
from sqlalchemy.orm import InstrumentedAttribute, Session

from middle_ground.models.comment import Comment
from middle_ground.models.enums import EntityType
from middle_ground.models.post import Post
from middle_ground.repositories.comment_repo import CommentRepository
from middle_ground.repositories.like_repo import LikeRepository
from middle_ground.repositories.post_repo import PostRepository
from middle_ground.services.errors import PostNotFound, ValidationError

logger = logging.getLogger(__name__)

__all__ = [
    "CommentScope",
    "CommentSort",
    "PageRequest",
    "PostSort",
    "RankedPage",
    "rank_comments",
    "rank_posts",
]


class PostSort(str, Enum):
    """Sort policies accepted by the post feed."""

    RECENT = "recent"
    BALANCED = "balanced"
    CONTROVERSIAL = "controversial"
    RIGHT = "right"
    LEFT = "left"
    MODERATE = "moderate"

    @classmethod
    def parse(cls, name: str | None) -> PostSort:
        """Return the policy called exactly ``name``; anything else means ``recent``."""
        try:
            return cls(name or cls.RECENT.value)
        except ValueError:
            return cls.RECENT


class CommentSort(str, Enum):
    """Sort policies accepted by comment threads."""

    RECENT = "recent"
    CONTROVERSIAL = "controversial"
    BALANCED = "balanced"
    OLDEST = "oldest"

    @classmethod
    def parse(cls, name: str | None) -> CommentSort:
        """Return the policy called exactly ``name``; anything else means ``recent``."""
        try:
            return cls(name or cls.RECENT.value)
        except ValueError:
            return cls.RECENT


@dataclass(frozen=True)
class PageRequest:
    """One-based page number and page size."""

    page: int = 1
    limit: int = 10

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page must be at least 1")
        if self.limit < 1:
            raise ValidationError("limit must be at least 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class RankedPage:
    """Ordered ids of one page plus the size of the whole scope."""

    ids: list[int]
    total: int
    request: PageRequest

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.request.limit)


@dataclass(frozen=True)
class CommentScope:
    """Top-level comments of a post, or direct replies to one of its comments."""

    post_id: int
    parent_comment_id: int | None = None


def _zero(column: ColumnElement) -> ColumnElement:
    return func.coalesce(column, 0)


def _order_by(
    policy: str,
    counts: Subquery,
    date_col: InstrumentedAttribute,
    id_col: InstrumentedAttribute,
) -> list[ColumnElement]:
    if policy == "oldest":
        return [date_col.asc(), id_col.asc()]

    right = _zero(counts.c.right_likes)
    left = _zero(counts.c.left_likes)
    metrics = {
        "controversial": _zero(counts.c.total_likes).desc(),
        "balanced": func.abs(right - left).asc(),
        "right": right.desc(),
        "left": left.desc(),
        "moderate": _zero(counts.c.moderate_likes).desc(),
    }
    primary = [metrics[policy]] if policy in metrics else []
    return [*primary, date_col.desc(), id_col.desc()]


def rank_posts(db: Session, sort: PostSort | str | None, page: PageRequest) -> RankedPage:
    """Return one page of post ids ordered by ``sort`` and the total post count."""
    policy = sort if isinstance(sort, PostSort) else PostSort.parse(sort)
    counts = LikeRepository(db).counts_subquery(EntityType.POST)
    order_by = _order_by(policy.value, counts, Post.date_posted, Post.post_id)
    ids, total = PostRepository(db).page(
        order_by=order_by,
        limit=page.limit,
        offset=page.offset,
        counts=counts,
    )
    logger.debug("Ranked posts by %s: page=%d ids=%s total=%d", policy.value, page.page, ids, total)
    return RankedPage(ids=ids, total=total, request=page)


def rank_comments(
    db: Session,
    scope: CommentScope,
    sort: CommentSort | str | None,
    page: PageRequest,
) -> RankedPage:
    """Return one page of comment ids within ``scope`` ordered by ``sort``.

    Raises:
        PostNotFound: If the scope's post does not exist.
    """
    if not PostRepository(db).exists(scope.post_id):
        raise PostNotFound()
    policy = sort if isinstance(sort, CommentSort) else CommentSort.parse(sort)
    counts = LikeRepository(db).counts_subquery(EntityType.COMMENT)
    order_by = _order_by(policy.value, counts, Comment.date_posted, Comment.comment_id)
    ids, total = CommentRepository(db).page(
        where=CommentRepository.thread_filter(scope.post_id, scope.parent_comment_id),
        order_by=order_by,
        limit=page.limit,
        offset=page.offset,
        counts=counts,
    )
    logger.debug(
        "Ranked comments of post %d (parent=%s) by %s: page=%d total=%d",
        scope.post_id,
        scope.parent_comment_id,
        policy.value,
        page.page,
        total,
    )
    return RankedPage(ids=ids, total=total, request=page)
