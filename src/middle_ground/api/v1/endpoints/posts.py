"""Post and feed endpoints for the Middle Ground API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from middle_ground.api.v1.dependencies import CurrentUsernameDep, SessionDep
from middle_ground.core.settings import settings
from middle_ground.schemas.comment import CommentListResponse
from middle_ground.schemas.post import (
    PostCreate,
    PostCreated,
    PostDetailResponse,
    PostListResponse,
)
from middle_ground.services import comment_thread, feed_service
from middle_ground.services.ranking import PageRequest

router = APIRouter(prefix="/feed", tags=["feed"])

PageQuery = Annotated[int, Query(ge=1, description="One-based page number")]


@router.post("/posts", response_model=PostCreated, status_code=status.HTTP_201_CREATED)
def create_post(payload: PostCreate, username: CurrentUsernameDep, db: SessionDep) -> PostCreated:
    post = feed_service.create_post(
        db,
        username,
        title=payload.title,
        body=payload.body,
        sources=payload.sources,
    )
    return PostCreated(post_id=post.post_id)


@router.get("/posts", response_model=PostListResponse)
def list_posts(
    db: SessionDep,
    page: PageQuery = 1,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_post_page_size,
    sort_by: Annotated[str, Query(description="recent, balanced, controversial, right, left or moderate")] = "recent",
) -> PostListResponse:
    """Return one page of the feed ordered by ``sort_by``.

    Sort names are matched exactly; anything else falls back to ``recent``.
    The response's ``sort_by`` echoes the policy actually applied, not the
    raw query value.
    """
    result = feed_service.list_posts(db, PageRequest(page=page, limit=limit), sort_by)
    return PostListResponse.from_page(result)


@router.get("/posts/{post_id}", response_model=PostDetailResponse)
def get_post(post_id: int, db: SessionDep) -> PostDetailResponse:
    return PostDetailResponse.from_detail(feed_service.get_post(db, post_id))


@router.get("/posts/{post_id}/comments", response_model=CommentListResponse)
def list_comments(
    post_id: int,
    db: SessionDep,
    page: PageQuery = 1,
    limit: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_comment_page_size,
    sort_by: Annotated[str, Query(description="recent, controversial, balanced or oldest")] = "recent",
    parent_id: Annotated[int | None, Query(description="List direct replies to this comment")] = None,
) -> CommentListResponse:
    """Return one page of top-level comments, or of replies to ``parent_id``.

    As with posts, ``sort_by`` in the response names the policy actually
    applied, so an unknown name comes back as ``recent``.
    """
    result = comment_thread.list_comments(
        db,
        post_id,
        parent_id,
        sort_by,
        PageRequest(page=page, limit=limit),
    )
    return CommentListResponse.from_page(result)
