"""SQLAlchemy model for feed posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from middle_ground.db.session import Base
from middle_ground.db.time import utcnow
from middle_ground.models.user import User


class Post(Base):
    """Top-level content entity authored by a user.

    Posts are never edited by the feed; ``date_posted`` is the only temporal
    ordering key exposed to ranking.
    """

    __tablename__ = "posts"
    __table_args__ = (Index("ix_posts_date_posted", "date_posted"),)

    post_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    sources: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_posted: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    author: Mapped[User] = relationship("User", lazy="joined")
