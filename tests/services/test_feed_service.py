# tests/services/test_feed_service.py
"""Tests for post and comment creation and reads."""

from __future__ import annotations

import pytest

from middle_ground.models import Comment, EntityType, Leaning
from middle_ground.services import feed_service
from middle_ground.services.entities import (
    CommentParent,
    PostParent,
    parent_from_fields,
)
from middle_ground.services.errors import (
    AmbiguousParent,
    InvalidParent,
    MissingFields,
    PostNotFound,
    UserNotFound,
)
from middle_ground.services.ranking import PageRequest, PostSort


def test_create_post(db_session, test_user) -> None:
    post = feed_service.create_post(
        db_session, test_user.username, "Title", "Body", sources="https://example.com"
    )

    assert post.post_id is not None
    assert post.username == test_user.username
    assert post.sources == "https://example.com"
    assert post.date_posted is not None


@pytest.mark.parametrize(("title", "body"), [("", "body"), ("title", ""), (None, "body"), ("  ", "x")])
def test_create_post_requires_title_and_body(db_session, test_user, title, body) -> None:
    with pytest.raises(MissingFields):
        feed_service.create_post(db_session, test_user.username, title, body)


def test_create_post_unknown_author(db_session) -> None:
    with pytest.raises(UserNotFound):
        feed_service.create_post(db_session, "nobody", "Title", "Body")


def test_list_posts_includes_metrics(
    db_session, make_user, make_post, make_comment, make_like, test_user
) -> None:
    older = make_post(test_user, title="older")
    newer = make_post(test_user, title="newer")
    make_comment(test_user, older)
    make_like(make_user("righty", Leaning.R), older)

    page = feed_service.list_posts(db_session, PageRequest(page=1, limit=10))

    assert page.sort is PostSort.RECENT
    assert [item.post.post_id for item in page.items] == [newer.post_id, older.post_id]
    older_item = page.items[1]
    assert older_item.comment_count == 1
    assert older_item.likes.right_likes == 1
    assert older_item.likes.polarization_score == 1
    assert page.items[0].likes.total_likes == 0
    assert page.total == 2
    assert page.total_pages == 1


def test_get_post_returns_thread_oldest_first(
    db_session, make_user, make_comment, make_like, test_user, test_post
) -> None:
    first = make_comment(test_user, test_post)
    reply = make_comment(test_user, test_post, parent=first)
    second = make_comment(test_user, test_post)
    make_like(make_user("sl", Leaning.SL), reply)

    detail = feed_service.get_post(db_session, test_post.post_id)

    assert detail.post.post_id == test_post.post_id
    assert [comment.comment_id for comment, _ in detail.comments] == [
        first.comment_id,
        reply.comment_id,
        second.comment_id,
    ]
    assert detail.comments[1][1].left_likes == 1
    assert detail.likes.total_likes == 0


def test_get_missing_post(db_session) -> None:
    with pytest.raises(PostNotFound):
        feed_service.get_post(db_session, 777)


def test_add_top_level_comment(db_session, test_user, test_post) -> None:
    comment = feed_service.add_comment(
        db_session, test_user.username, "Nice post", PostParent(test_post.post_id)
    )

    assert comment.post_id == test_post.post_id
    assert comment.parent_type is EntityType.POST
    assert comment.parent_comment_id is None


def test_reply_inherits_post(db_session, make_comment, test_user, test_post) -> None:
    parent = make_comment(test_user, test_post)

    reply = feed_service.add_comment(
        db_session, test_user.username, "Agreed", CommentParent(parent.comment_id)
    )

    assert reply.post_id == test_post.post_id
    assert reply.parent_comment_id == parent.comment_id


def test_comment_on_missing_parent(db_session, test_user) -> None:
    with pytest.raises(InvalidParent):
        feed_service.add_comment(db_session, test_user.username, "Hello", PostParent(404))
    with pytest.raises(InvalidParent):
        feed_service.add_comment(db_session, test_user.username, "Hello", CommentParent(404))
    assert db_session.query(Comment).count() == 0


def test_comment_requires_body(db_session, test_user, test_post) -> None:
    with pytest.raises(MissingFields):
        feed_service.add_comment(db_session, test_user.username, "", PostParent(test_post.post_id))


def test_parent_from_fields() -> None:
    assert parent_from_fields(3, None) == PostParent(3)
    assert parent_from_fields(None, 8) == CommentParent(8)
    with pytest.raises(MissingFields):
        parent_from_fields(None, None)
    with pytest.raises(AmbiguousParent):
        parent_from_fields(3, 8)
