"""Data access helpers for working with comments."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import ColumnElement, Subquery, and_, func, select
from sqlalchemy.orm import Session

from middle_ground.models.comment import Comment
from middle_ground.models.enums import EntityType
from middle_ground.models.post import Post
from middle_ground.services.entities import CommentParent, ParentRef
from middle_ground.services.errors import InvalidParent

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, comment_id: int) -> Comment | None:
        """Return a comment by identifier."""
        return self.session.get(Comment, comment_id)

    def exists(self, comment_id: int) -> bool:
        """Return True if a comment with ``comment_id`` exists."""
        found = self.session.execute(
            select(Comment.comment_id).where(Comment.comment_id == comment_id)
        ).first()
        return found is not None

    def get_many(self, comment_ids: Sequence[int]) -> list[Comment]:
        """Return comments for ``comment_ids`` in the order the ids were given."""
        if not comment_ids:
            return []
        comments = self.session.scalars(
            select(Comment).where(Comment.comment_id.in_(comment_ids))
        ).all()
        by_id = {comment.comment_id: comment for comment in comments}
        return [by_id[comment_id] for comment_id in comment_ids if comment_id in by_id]

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return every comment in the thread of ``post_id``, oldest first."""
        return list(
            self.session.scalars(
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(Comment.date_posted.asc(), Comment.comment_id.asc())
            )
        )

    @staticmethod
    def thread_filter(post_id: int, parent_comment_id: int | None) -> ColumnElement[bool]:
        """Return the WHERE clause selecting one level of a post's thread."""
        if parent_comment_id is None:
            return and_(Comment.post_id == post_id, Comment.parent_type == EntityType.POST)
        return and_(
            Comment.post_id == post_id,
            Comment.parent_type == EntityType.COMMENT,
            Comment.parent_id == parent_comment_id,
        )

    def page(
        self,
        *,
        where: ColumnElement[bool],
        order_by: Sequence[ColumnElement],
        limit: int,
        offset: int,
        counts: Subquery | None = None,
    ) -> tuple[list[int], int]:
        """Return one ordered page of comment ids and the total matching ``where``."""
        stmt = select(Comment.comment_id).where(where)
        if counts is not None:
            stmt = stmt.outerjoin(counts, counts.c.entity_id == Comment.comment_id)
        stmt = stmt.order_by(*order_by).limit(limit).offset(offset)
        ids = list(self.session.scalars(stmt))
        total = self.session.scalar(select(func.count()).select_from(Comment).where(where)) or 0
        return ids, total

    def reply_counts(self, comment_ids: Sequence[int]) -> dict[int, int]:
        """Return the number of direct replies for each id in ``comment_ids``."""
        if not comment_ids:
            return {}
        rows = self.session.execute(
            select(Comment.parent_id, func.count())
            .where(
                Comment.parent_type == EntityType.COMMENT,
                Comment.parent_id.in_(comment_ids),
            )
            .group_by(Comment.parent_id)
        ).all()
        counts = {comment_id: 0 for comment_id in comment_ids}
        counts.update({parent_id: count for parent_id, count in rows})
        return counts

    def count_for_posts(self, post_ids: Sequence[int]) -> dict[int, int]:
        """Return the number of comments in each post's thread."""
        if not post_ids:
            return {}
        rows = self.session.execute(
            select(Comment.post_id, func.count())
            .where(Comment.post_id.in_(post_ids))
            .group_by(Comment.post_id)
        ).all()
        counts = {post_id: 0 for post_id in post_ids}
        counts.update({post_id: count for post_id, count in rows})
        return counts

    def create(self, *, username: str, body: str, parent: ParentRef) -> Comment:
        """Insert a comment under ``parent`` and return the persisted instance.

        Raises:
            InvalidParent: If the referenced post or comment does not exist.
        """
        if isinstance(parent, CommentParent):
            parent_comment = self.get_by_id(parent.comment_id)
            if parent_comment is None:
                raise InvalidParent("Invalid Comment ID")
            comment = Comment(
                post_id=parent_comment.post_id,
                parent_type=EntityType.COMMENT,
                parent_id=parent.comment_id,
                username=username,
                body=body,
            )
        else:
            if self.session.get(Post, parent.post_id) is None:
                raise InvalidParent("Invalid Post ID")
            comment = Comment(
                post_id=parent.post_id,
                parent_type=EntityType.POST,
                parent_id=parent.post_id,
                username=username,
                body=body,
            )
        self.session.add(comment)
        self.session.flush()
        return comment
