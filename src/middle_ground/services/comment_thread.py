"""Paginated one-level views of a post's comment thread."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from middle_ground.models.comment import Comment
from middle_ground.models.enums import EntityType
from middle_ground.repositories.comment_repo import CommentRepository
from middle_ground.services.aggregator import LikeDistribution, aggregate_many
from middle_ground.services.ranking import (
    CommentScope,
    CommentSort,
    PageRequest,
    RankedPage,
    rank_comments,
)

__all__ = ["CommentPage", "ThreadedComment", "list_comments"]


@dataclass(frozen=True)
class ThreadedComment:
    """A comment with its direct reply count and like distribution."""

    comment: Comment
    reply_count: int
    likes: LikeDistribution


@dataclass(frozen=True)
class CommentPage:
    items: list[ThreadedComment]
    ranked: RankedPage
    sort: CommentSort
    scope: CommentScope

    @property
    def total(self) -> int:
        return self.ranked.total

    @property
    def total_pages(self) -> int:
        return self.ranked.total_pages


def list_comments(
    db: Session,
    post_id: int,
    parent_comment_id: int | None,
    sort: CommentSort | str | None,
    page: PageRequest,
) -> CommentPage:
    """Return one page of top-level comments or of direct replies.

    Args:
        db: Database session.
        post_id: Post whose thread is listed.
        parent_comment_id: ``None`` for top-level comments, otherwise the
            comment whose direct replies are listed.
        sort: Comment sort policy name; unknown names mean ``recent``.
        page: Page window.

    Raises:
        PostNotFound: If ``post_id`` does not exist. Checked before any
            pagination query runs.
    """
    policy = sort if isinstance(sort, CommentSort) else CommentSort.parse(sort)
    scope = CommentScope(post_id=post_id, parent_comment_id=parent_comment_id)
    ranked = rank_comments(db, scope, policy, page)

    repo = CommentRepository(db)
    comments = repo.get_many(ranked.ids)
    reply_counts = repo.reply_counts(ranked.ids)
    likes = aggregate_many(db, EntityType.COMMENT, ranked.ids)

    items = [
        ThreadedComment(
            comment=comment,
            reply_count=reply_counts.get(comment.comment_id, 0),
            likes=likes[comment.comment_id],
        )
        for comment in comments
    ]
    return CommentPage(items=items, ranked=ranked, sort=policy, scope=scope)
