"""Adding and removing leaning-tagged likes."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from middle_ground.models.enums import EntityType
from middle_ground.repositories.comment_repo import CommentRepository
from middle_ground.repositories.like_repo import LikeRepository
from middle_ground.repositories.post_repo import PostRepository
from middle_ground.repositories.user_repo import UserRepository
from middle_ground.services.aggregator import LikeDistribution, aggregate
from middle_ground.services.entities import EntityRef
from middle_ground.services.errors import (
    AlreadyLiked,
    CommentNotFound,
    LikeNotFound,
    PostNotFound,
    UserNotFound,
)

logger = logging.getLogger(__name__)

__all__ = ["add_like", "remove_like"]


def _ensure_entity_exists(db: Session, ref: EntityRef) -> None:
    if ref.kind is EntityType.POST:
        if not PostRepository(db).exists(ref.id):
            raise PostNotFound("post not found")
    elif not CommentRepository(db).exists(ref.id):
        raise CommentNotFound("comment not found")


def add_like(
    db: Session,
    username: str,
    entity_type: str | EntityType,
    entity_id: int,
) -> LikeDistribution:
    """Record a like by ``username`` and return the entity's new distribution.

    The user's current leaning is copied onto the like row.

    Raises:
        UserNotFound: If ``username`` is not registered.
        InvalidEntityType: If ``entity_type`` is not POST or COMMENT.
        EntityNotFound: If the post or comment does not exist.
        AlreadyLiked: If the user already likes the entity.
    """
    pol_lean = UserRepository(db).get_leaning(username)
    if pol_lean is None:
        raise UserNotFound()
    ref = EntityRef.parse(entity_type, entity_id)
    _ensure_entity_exists(db, ref)

    try:
        LikeRepository(db).insert(username=username, ref=ref, pol_lean=pol_lean)
        db.commit()
    except AlreadyLiked:
        db.rollback()
        logger.info("Duplicate like by %s on %s %d", username, ref.kind.value, ref.id)
        raise
    except Exception:
        db.rollback()
        raise

    logger.info("Like added by %s (%s) on %s %d", username, pol_lean.value, ref.kind.value, ref.id)
    return aggregate(db, ref)


def remove_like(
    db: Session,
    username: str,
    entity_type: str | EntityType,
    entity_id: int,
) -> LikeDistribution:
    """Delete the like held by ``username`` and return the new distribution.

    Raises:
        InvalidEntityType: If ``entity_type`` is not POST or COMMENT.
        LikeNotFound: If the user holds no like on the entity.
    """
    ref = EntityRef.parse(entity_type, entity_id)
    try:
        deleted = LikeRepository(db).delete(username=username, ref=ref)
        if deleted == 0:
            raise LikeNotFound()
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Like removed by %s on %s %d", username, ref.kind.value, ref.id)
    return aggregate(db, ref)
