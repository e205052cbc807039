"""SQLAlchemy model for threaded comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from middle_ground.db.session import Base
from middle_ground.db.time import utcnow
from middle_ground.models.enums import ENTITY_TYPE, EntityType
from middle_ground.models.user import User


class Comment(Base):
    """Reply to a post or to another comment.

    The parent is a discriminated reference ``(parent_type, parent_id)``;
    both columns are required so a comment always has exactly one parent.
    ``post_id`` names the post at the root of the thread and equals
    ``parent_id`` for top-level comments.
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint(
            "parent_type = 'COMMENT' OR parent_id = post_id",
            name="ck_comments_top_level_parent",
        ),
        Index("ix_comments_thread", "post_id", "parent_type", "parent_id"),
        Index("ix_comments_date_posted", "date_posted"),
    )

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.post_id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_type: Mapped[EntityType] = mapped_column(
        ENTITY_TYPE,
        nullable=False,
    )
    parent_id: Mapped[int] = mapped_column(Integer, nullable=False)
    username: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    date_posted: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    author: Mapped[User] = relationship("User", lazy="joined")

    @property
    def parent_comment_id(self) -> int | None:
        """Return the parent comment id, or ``None`` for top-level comments."""
        if self.parent_type is EntityType.COMMENT:
            return self.parent_id
        return None
