"""Data access helpers for working with likes."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import Subquery, case, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from middle_ground.models.enums import LEFT_LEANINGS, RIGHT_LEANINGS, EntityType, Leaning
from middle_ground.models.like import Like
from middle_ground.services.entities import EntityRef
from middle_ground.services.errors import AlreadyLiked

__all__ = ["LikeRepository"]


class LikeRepository:
    """Thin wrapper around database access for like rows."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def insert(self, *, username: str, ref: EntityRef, pol_lean: Leaning) -> Like:
        """Insert a like, relying on the unique constraint to reject duplicates.

        Raises:
            AlreadyLiked: If ``username`` already likes ``ref``.
        """
        like = Like(
            username=username,
            entity_type=ref.kind,
            entity_id=ref.id,
            pol_lean=pol_lean,
        )
        try:
            with self.session.begin_nested():
                self.session.add(like)
        except IntegrityError as err:
            raise AlreadyLiked() from err
        return like

    def delete(self, *, username: str, ref: EntityRef) -> int:
        """Delete the like held by ``username`` on ``ref`` and return the row count."""
        result = self.session.execute(
            delete(Like).where(
                Like.username == username,
                Like.entity_type == ref.kind,
                Like.entity_id == ref.id,
            )
        )
        return result.rowcount or 0

    def count_by_category(self, ref: EntityRef) -> dict[Leaning, int]:
        """Return like counts per leaning for one entity.

        Leanings without likes are absent from the result.
        """
        rows = self.session.execute(
            select(Like.pol_lean, func.count())
            .where(Like.entity_type == ref.kind, Like.entity_id == ref.id)
            .group_by(Like.pol_lean)
        ).all()
        return {pol_lean: count for pol_lean, count in rows}

    def count_by_category_many(
        self,
        kind: EntityType,
        entity_ids: Iterable[int],
    ) -> dict[int, dict[Leaning, int]]:
        """Return sparse per-leaning counts for several entities of one kind."""
        ids = list(entity_ids)
        if not ids:
            return {}
        rows = self.session.execute(
            select(Like.entity_id, Like.pol_lean, func.count())
            .where(Like.entity_type == kind, Like.entity_id.in_(ids))
            .group_by(Like.entity_id, Like.pol_lean)
        ).all()
        counts: dict[int, dict[Leaning, int]] = {}
        for entity_id, pol_lean, count in rows:
            counts.setdefault(entity_id, {})[pol_lean] = count
        return counts

    def counts_subquery(self, kind: EntityType) -> Subquery:
        """Return a grouped subquery of like totals per entity of ``kind``.

        Columns: ``entity_id``, ``total_likes``, ``left_likes``,
        ``right_likes`` and ``moderate_likes``. Entities without likes have
        no row, so callers outer-join and coalesce to zero.
        """
        return (
            select(
                Like.entity_id.label("entity_id"),
                func.count().label("total_likes"),
                func.sum(case((Like.pol_lean.in_(LEFT_LEANINGS), 1), else_=0)).label("left_likes"),
                func.sum(case((Like.pol_lean.in_(RIGHT_LEANINGS), 1), else_=0)).label(
                    "right_likes"
                ),
                func.sum(case((Like.pol_lean == Leaning.M, 1), else_=0)).label("moderate_likes"),
            )
            .where(Like.entity_type == kind)
            .group_by(Like.entity_id)
            .subquery(f"{kind.value.lower()}_like_counts")
        )
