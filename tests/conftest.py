# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from middle_ground.core.security import create_access_token, hash_password
from middle_ground.db.session import Base, enable_sqlite_savepoints
from middle_ground.db.session import get_db as app_get_session
from middle_ground.main import app as fastapi_app
from middle_ground.models import Comment, EntityType, Leaning, Like, Post, User

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery staple"

# Fixed clock so ordering by date_posted is deterministic.
BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
_TICKS = count(1)


def next_timestamp() -> datetime:
    """Return a timestamp one minute later than the previous one."""
    return BASE_TIME + timedelta(minutes=next(_TICKS))


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits release SAVEPOINTs inside one outer transaction.

    Factories commit so that a service-level rollback cannot discard fixtures.
    """
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash shared by factory users; argon2id is slow enough to compute once."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture()
def make_user(db_session: Session, password_hash: str) -> Callable[..., User]:
    """Return a factory persisting users with a given leaning."""

    def _make_user(username: str, pol_lean: Leaning | str = Leaning.M) -> User:
        user = User(
            username=username,
            first_name=username.capitalize(),
            last_name="Tester",
            email=f"{username}@example.com",
            password_hash=password_hash,
            pol_lean=Leaning(pol_lean),
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts with strictly increasing dates."""

    def _make_post(
        author: User,
        title: str = "A post",
        body: str = "Post body",
        date_posted: datetime | None = None,
    ) -> Post:
        post = Post(
            username=author.username,
            title=title,
            body=body,
            date_posted=date_posted or next_timestamp(),
        )
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Return a factory persisting top-level comments or replies."""

    def _make_comment(
        author: User,
        post: Post,
        parent: Comment | None = None,
        body: str = "A comment",
        date_posted: datetime | None = None,
    ) -> Comment:
        comment = Comment(
            post_id=post.post_id,
            parent_type=EntityType.COMMENT if parent is not None else EntityType.POST,
            parent_id=parent.comment_id if parent is not None else post.post_id,
            username=author.username,
            body=body,
            date_posted=date_posted or next_timestamp(),
        )
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make_comment


@pytest.fixture()
def make_like(db_session: Session) -> Callable[..., Like]:
    """Return a factory persisting a like stamped with the user's leaning."""

    def _make_like(user: User, entity: Post | Comment) -> Like:
        if isinstance(entity, Post):
            entity_type, entity_id = EntityType.POST, entity.post_id
        else:
            entity_type, entity_id = EntityType.COMMENT, entity.comment_id
        like = Like(
            username=user.username,
            entity_type=entity_type,
            entity_id=entity_id,
            pol_lean=user.pol_lean,
        )
        db_session.add(like)
        db_session.commit()
        return like

    return _make_like


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user (moderate)."""
    return make_user("alice", Leaning.M)


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user leaning far-left."""
    return make_user("bob", Leaning.FL)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post for tests."""
    return make_post(test_user, title="Baseline", body="Test post content")


@pytest.fixture()
def user_password() -> str:
    """Plain-text password of every factory user."""
    return TEST_PASSWORD
