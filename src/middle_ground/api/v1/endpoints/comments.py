"""Comment creation endpoint."""

from __future__ import annotations

from fastapi import APIRouter, status

from middle_ground.api.v1.dependencies import CurrentUsernameDep, SessionDep
from middle_ground.schemas.comment import CommentCreate, CommentCreated
from middle_ground.services import feed_service
from middle_ground.services.entities import parent_from_fields

router = APIRouter(prefix="/feed", tags=["feed"])


@router.post("/comments", response_model=CommentCreated, status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreate,
    username: CurrentUsernameDep,
    db: SessionDep,
) -> CommentCreated:
    """Add a top-level comment to a post, or a reply to a comment."""
    parent = parent_from_fields(payload.post_id, payload.parent_comment_id)
    comment = feed_service.add_comment(db, username, payload.body, parent)
    return CommentCreated(
        comment_id=comment.comment_id,
        post_id=comment.post_id,
        parent_comment_id=comment.parent_comment_id,
    )
