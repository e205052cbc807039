"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import ColumnElement, Subquery, func, select
from sqlalchemy.orm import Session

from middle_ground.models.post import Post

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def exists(self, post_id: int) -> bool:
        """Return True if a post with ``post_id`` exists."""
        found = self.session.execute(
            select(Post.post_id).where(Post.post_id == post_id)
        ).first()
        return found is not None

    def get_many(self, post_ids: Sequence[int]) -> list[Post]:
        """Return posts for ``post_ids`` in the order the ids were given."""
        if not post_ids:
            return []
        posts = self.session.scalars(select(Post).where(Post.post_id.in_(post_ids))).all()
        by_id = {post.post_id: post for post in posts}
        return [by_id[post_id] for post_id in post_ids if post_id in by_id]

    def count(self) -> int:
        """Return the number of posts."""
        return self.session.scalar(select(func.count()).select_from(Post)) or 0

    def page(
        self,
        *,
        order_by: Sequence[ColumnElement],
        limit: int,
        offset: int,
        counts: Subquery | None = None,
    ) -> tuple[list[int], int]:
        """Return one ordered page of post ids and the total number of posts.

        Args:
            order_by: Ordering expressions, possibly referencing ``counts``.
            limit: Maximum number of ids to return.
            offset: Number of ordered rows to skip.
            counts: Optional per-post aggregate subquery outer-joined on the id.
        """
        stmt = select(Post.post_id)
        if counts is not None:
            stmt = stmt.outerjoin(counts, counts.c.entity_id == Post.post_id)
        stmt = stmt.order_by(*order_by).limit(limit).offset(offset)
        ids = list(self.session.scalars(stmt))
        return ids, self.count()

    def create(
        self,
        *,
        username: str,
        title: str,
        body: str,
        sources: str | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(username=username, title=title, body=body, sources=sources)
        self.session.add(post)
        self.session.flush()
        return post
