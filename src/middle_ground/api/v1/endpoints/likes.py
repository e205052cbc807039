"""Like endpoints for the Middle Ground API."""

from __future__ import annotations

from fastapi import APIRouter, status

from middle_ground.api.v1.dependencies import CurrentUsernameDep, SessionDep
from middle_ground.schemas.like import LikeRequest, LikeResponse
from middle_ground.services import like_service

router = APIRouter(prefix="/feed", tags=["likes"])


@router.post("/likes", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
def add_like(payload: LikeRequest, username: CurrentUsernameDep, db: SessionDep) -> LikeResponse:
    """Like a post or comment and return its refreshed distribution."""
    distribution = like_service.add_like(db, username, payload.entity_type, payload.entity_id)
    return LikeResponse.build(distribution, "Like added successfully")


@router.delete("/likes", response_model=LikeResponse)
def remove_like(payload: LikeRequest, username: CurrentUsernameDep, db: SessionDep) -> LikeResponse:
    distribution = like_service.remove_like(db, username, payload.entity_type, payload.entity_id)
    return LikeResponse.build(distribution, "Like removed successfully")
