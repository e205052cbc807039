"""SQLAlchemy model for registered users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from middle_ground.db.session import Base
from middle_ground.db.time import utcnow
from middle_ground.models.enums import LEANING_TYPE, Leaning


class User(Base):
    """Registered account keyed by its username.

    The declared leaning is copied onto every like the user casts, so later
    profile changes never rewrite historical engagement.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    pol_lean: Mapped[Leaning] = mapped_column(LEANING_TYPE, nullable=False)
    account_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
