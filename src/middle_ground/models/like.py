"""Models capturing leaning-tagged likes on posts and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from middle_ground.db.session import Base
from middle_ground.db.time import utcnow
from middle_ground.models.enums import ENTITY_TYPE, LEANING_TYPE, EntityType, Leaning


class Like(Base):
    """Per-user like on a post or comment.

    ``entity_id`` is only meaningful together with ``entity_type``. The
    leaning is a snapshot of the user's declared leaning at like time.
    """

    __tablename__ = "likes"
    __table_args__ = (
        # One like per user per entity; inserts fail rather than upsert.
        UniqueConstraint("username", "entity_type", "entity_id", name="uq_likes_user_entity"),
        Index("ix_likes_entity", "entity_type", "entity_id"),
        Index("ix_likes_username", "username"),
    )

    like_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("users.username", ondelete="CASCADE"),
        nullable=False,
    )
    entity_type: Mapped[EntityType] = mapped_column(
        ENTITY_TYPE,
        nullable=False,
    )
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    pol_lean: Mapped[Leaning] = mapped_column(LEANING_TYPE, nullable=False)
    date_liked: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
