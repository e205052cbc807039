# tests/v1/test_comments.py
"""Tests for comment creation and comment thread listing."""

from fastapi import status

COMMENTS_URL = "/api/v1/feed/comments"


def _thread_url(post_id: int) -> str:
    return f"/api/v1/feed/posts/{post_id}/comments"


def test_comment_on_post(client, auth_token, test_post) -> None:
    response = client.post(
        COMMENTS_URL,
        json={"body": "Great read", "post_id": test_post.post_id},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["post_id"] == test_post.post_id
    assert data["parent_comment_id"] is None


def test_reply_to_comment(client, auth_token, make_comment, test_user, test_post) -> None:
    parent = make_comment(test_user, test_post)

    response = client.post(
        COMMENTS_URL,
        json={"body": "Reply", "parent_comment_id": parent.comment_id},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["post_id"] == test_post.post_id
    assert data["parent_comment_id"] == parent.comment_id


def test_comment_requires_a_parent(client, auth_token) -> None:
    response = client.post(COMMENTS_URL, json={"body": "Orphan"}, headers=auth_token)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_comment_with_both_parents(client, auth_token, make_comment, test_user, test_post) -> None:
    parent = make_comment(test_user, test_post)

    response = client.post(
        COMMENTS_URL,
        json={"body": "x", "post_id": test_post.post_id, "parent_comment_id": parent.comment_id},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Provide either post_id or parent_comment_id, not both"


def test_comment_on_missing_post(client, auth_token) -> None:
    response = client.post(COMMENTS_URL, json={"body": "x", "post_id": 31337}, headers=auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Invalid Post ID"


def test_list_oldest_comments(client, make_comment, test_user, test_post) -> None:
    for index in range(3):
        make_comment(test_user, test_post, body=f"comment {index}")

    response = client.get(
        _thread_url(test_post.post_id),
        params={"page": 1, "limit": 20, "sort_by": "oldest"},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [c["body"] for c in data["comments"]] == ["comment 0", "comment 1", "comment 2"]
    assert data["total_comments"] == 3
    assert data["total_pages"] == 1
    assert data["comments_per_page"] == 20
    assert data["parent_comment_id"] is None


def test_list_replies(client, make_comment, test_user, test_post) -> None:
    parent = make_comment(test_user, test_post)
    make_comment(test_user, test_post, parent=parent, body="child")

    response = client.get(_thread_url(test_post.post_id), params={"parent_id": parent.comment_id})

    data = response.json()
    assert [c["body"] for c in data["comments"]] == ["child"]
    assert data["parent_comment_id"] == parent.comment_id


def test_list_comments_reply_count(client, make_comment, test_user, test_post) -> None:
    parent = make_comment(test_user, test_post)
    make_comment(test_user, test_post, parent=parent)

    data = client.get(_thread_url(test_post.post_id)).json()

    assert data["comments"][0]["reply_count"] == 1
    assert data["comments"][0]["likes"]["M"] == 0


def test_list_comments_missing_post(client) -> None:
    response = client.get(_thread_url(999))

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_comments_echoes_applied_sort(client, make_comment, test_user, test_post) -> None:
    make_comment(test_user, test_post)

    for requested in ("sideways", "OLDEST"):
        data = client.get(_thread_url(test_post.post_id), params={"sort_by": requested}).json()
        assert data["sort_by"] == "recent"

    data = client.get(_thread_url(test_post.post_id), params={"sort_by": "oldest"}).json()
    assert data["sort_by"] == "oldest"
